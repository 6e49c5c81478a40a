"""Shared fixtures: sample feeds, sources and a recording sleep."""

from typing import Callable, List

import pytest

from rssdash.config import SourceConfig

RSS_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom">
  <channel>
    <title>Example News</title>
    <link>https://example.com/</link>
    <atom:link href="https://example.com/rss" rel="self" type="application/rss+xml"/>
    <item>
      <title>  The Future of Large Language Models  </title>
      <link>https://example.com/article/llm-future</link>
      <description><![CDATA[<p>A deep dive into <b>where LLMs</b> are headed.</p>]]></description>
      <pubDate>Mon, 15 Jan 2024 09:00:00 GMT</pubDate>
    </item>
    <item>
      <title>AI Regulation: What to Expect</title>
      <link>https://example.com/article/ai-regulation</link>
      <description>Governments worldwide are grappling with AI policy.</description>
      <pubDate>Sun, 14 Jan 2024 15:00:00 GMT</pubDate>
    </item>
  </channel>
</rss>
"""

ATOM_FEED = """<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Example Blog</title>
  <entry>
    <title type="text">Attention Is All You Need</title>
    <link rel="self" href="https://blog.example.com/entries/1.atom"/>
    <link rel="alternate" type="text/html" href="https://blog.example.com/posts/attention"/>
    <published>2024-01-15T12:00:00Z</published>
    <updated>2024-01-16T08:00:00Z</updated>
    <summary>A survey of attention mechanisms.</summary>
  </entry>
</feed>
"""

RDF_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
         xmlns="http://purl.org/rss/1.0/"
         xmlns:dc="http://purl.org/dc/elements/1.1/">
  <channel rdf:about="https://slashdot.example/">
    <title>Slashdot</title>
    <items>
      <rdf:Seq>
        <rdf:li rdf:resource="https://slashdot.example/story/1"/>
        <rdf:li rdf:resource="https://slashdot.example/story/2"/>
      </rdf:Seq>
    </items>
  </channel>
  <item rdf:about="https://slashdot.example/story/1">
    <title>First story</title>
    <link>https://slashdot.example/story/1</link>
    <description>News for nerds.</description>
    <dc:date>2024-01-15T10:00:00+00:00</dc:date>
  </item>
  <item rdf:about="https://slashdot.example/story/2">
    <title>Second story</title>
    <link>https://slashdot.example/story/2</link>
    <dc:date>2024-01-15T11:00:00+00:00</dc:date>
  </item>
</rdf:RDF>
"""


def rss_with_titles(*titles: str) -> str:
    items = "".join(
        f"<item><title>{title}</title><link>https://example.com/{i}</link></item>"
        for i, title in enumerate(titles)
    )
    return f'<rss version="2.0"><channel><title>t</title>{items}</channel></rss>'


class RecordingSleep:
    """Async stand-in for asyncio.sleep that records requested delays."""

    def __init__(self) -> None:
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def fake_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_source() -> Callable[..., SourceConfig]:
    def factory(source_id: str, url: str = "", **fields) -> SourceConfig:
        return SourceConfig(
            id=source_id,
            url=url or f"https://feeds.example.com/{source_id}",
            name=fields.pop("name", source_id.title()),
            name_zh=fields.pop("name_zh", f"{source_id}-zh"),
            category=fields.pop("category", "tech"),
            color=fields.pop("color", "#123456"),
            lang=fields.pop("lang", "en"),
        )

    return factory


@pytest.fixture
def rss_feed() -> str:
    return RSS_FEED


@pytest.fixture
def atom_feed() -> str:
    return ATOM_FEED


@pytest.fixture
def rdf_feed() -> str:
    return RDF_FEED


@pytest.fixture
def titled_rss() -> Callable[..., str]:
    return rss_with_titles
