"""Tests for rssdash.ingestion.xml_tree."""

import pytest

from rssdash.ingestion.errors import FeedParseError
from rssdash.ingestion.xml_tree import parse_xml


class TestParseXml:
    def test_rss_structure(self, rss_feed: str) -> None:
        tree = parse_xml(rss_feed)

        assert list(tree) == ["rss"]
        assert tree["rss"]["@_version"] == "2.0"
        channel = tree["rss"]["channel"]
        assert channel["title"] == "Example News"
        assert isinstance(channel["item"], list)
        assert len(channel["item"]) == 2

    def test_text_is_trimmed(self, rss_feed: str) -> None:
        item = parse_xml(rss_feed)["rss"]["channel"]["item"][0]
        assert item["title"] == "The Future of Large Language Models"

    def test_cdata_is_kept_as_text(self, rss_feed: str) -> None:
        item = parse_xml(rss_feed)["rss"]["channel"]["item"][0]
        assert item["description"] == "<p>A deep dive into <b>where LLMs</b> are headed.</p>"

    def test_prefixed_element_keeps_prefix(self, rss_feed: str) -> None:
        channel = parse_xml(rss_feed)["rss"]["channel"]
        assert channel["atom:link"]["@_rel"] == "self"

    def test_default_namespace_is_bare(self, atom_feed: str) -> None:
        tree = parse_xml(atom_feed)

        assert list(tree) == ["feed"]
        entry = tree["feed"]["entry"]
        assert isinstance(entry, dict)

    def test_attributes_and_text(self, atom_feed: str) -> None:
        entry = parse_xml(atom_feed)["feed"]["entry"]
        assert entry["title"] == {"@_type": "text", "#text": "Attention Is All You Need"}

    def test_repeated_elements_become_list(self, atom_feed: str) -> None:
        links = parse_xml(atom_feed)["feed"]["entry"]["link"]
        assert [link["@_rel"] for link in links] == ["self", "alternate"]

    def test_rdf_prefixes(self, rdf_feed: str) -> None:
        tree = parse_xml(rdf_feed)

        assert list(tree) == ["rdf:RDF"]
        items = tree["rdf:RDF"]["item"]
        assert len(items) == 2
        assert items[0]["@_rdf:about"] == "https://slashdot.example/story/1"
        assert items[0]["dc:date"] == "2024-01-15T10:00:00+00:00"

    def test_empty_element_is_empty_string(self) -> None:
        tree = parse_xml("<rss><channel><title/><item/></channel></rss>")
        assert tree["rss"]["channel"] == {"title": "", "item": ""}

    def test_leading_whitespace_is_ignored(self) -> None:
        tree = parse_xml('\n  <?xml version="1.0"?><feed><title>x</title></feed>')
        assert tree == {"feed": {"title": "x"}}

    def test_malformed_xml_raises(self) -> None:
        with pytest.raises(FeedParseError):
            parse_xml("<rss><channel></rss>")

    def test_non_xml_raises(self) -> None:
        with pytest.raises(FeedParseError):
            parse_xml("not xml at all")

    def test_html_named_entities(self) -> None:
        tree = parse_xml("<rss><channel><item><title>A&nbsp;B &mdash; C</title></item></channel></rss>")
        assert tree["rss"]["channel"]["item"]["title"] == "A\xa0B \u2014 C"

    def test_xml_entities_still_resolved(self) -> None:
        tree = parse_xml("<rss><title>&lt;b&gt; &amp; &quot;x&quot; &apos;y&apos; &#169;</title></rss>")
        assert tree["rss"]["title"] == "<b> & \"x\" 'y' ©"

    def test_entities_inside_cdata_are_untouched(self) -> None:
        tree = parse_xml("<rss><description><![CDATA[a&nbsp;b]]></description><x>y</x></rss>")
        assert tree["rss"]["description"] == "a&nbsp;b"

    def test_unknown_entity_raises(self) -> None:
        with pytest.raises(FeedParseError):
            parse_xml("<rss><title>&bogus;</title></rss>")

    def test_default_binding_wins_over_prefix_for_same_uri(self) -> None:
        tree = parse_xml(
            '<feed xmlns:atom="http://www.w3.org/2005/Atom" xmlns="http://www.w3.org/2005/Atom">'
            "<title>t</title></feed>"
        )
        assert tree == {"feed": {"title": "t"}}

    def test_prefix_declared_after_default_is_ignored(self) -> None:
        tree = parse_xml(
            '<feed xmlns="http://www.w3.org/2005/Atom" xmlns:atom="http://www.w3.org/2005/Atom">'
            "<atom:title>t</atom:title></feed>"
        )
        assert tree == {"feed": {"title": "t"}}

    def test_mixed_text_and_children(self) -> None:
        tree = parse_xml("<rss><description>Hello <b>world</b> there</description></rss>")
        assert tree["rss"]["description"] == {"b": "world", "#text": "Hello  there"}
