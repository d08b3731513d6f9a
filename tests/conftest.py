import pytest
import requests

import site_variants

ROYAL_ROAD_BOOK = """
<html><body>
<div class="fic-header">
  <h2>The Wandering Inn</h2>
  <h4>by <a href="/user/profile/1">profile</a> pirateaba</h4>
</div>
<a href="http://royalroadl.com/fiction/chapter/100">Start Reading</a>
<a href="/fiction/5701/reviews">Reviews</a>
{links}
</body></html>
"""

ROYAL_ROAD_CHAPTER = """
<html><body>
<div class="fic-header"><h2>{title}</h2></div>
<div class="chapter-content"><p>“Hello,” said Erin…</p><p>It’s fine.</p></div>
</body></html>
"""

WUXIAWORLD_BOOK = """
<html><body>
<div class="entry-header"><h1>Martial God Asura 3 Chapters Index</h1></div>
{rows}
</body></html>
"""

WUXIAWORLD_ROW = """
<p>
  <a href="http://www.wuxiaworld.com/mga-index/mga-chapter-{n}/">Chapter {n}</a>
  <a href="http://www.wuxiaworld.com/forum-{n}/mga-chapter-{n}-discussion/">Discuss</a>
  <a href="http://www.wuxiaworld.com/tl-notes-{n}/mga-chapter-{n}-notes/">Notes</a>
</p>
"""

WUXIAWORLD_CHAPTER = """
<html><body>
<header class="entry-header"><h1>{title}</h1></header>
<div itemprop="articleBody"><p>Lin Feng walked on.</p></div>
</body></html>
"""


class FakeResponse:
    def __init__(self, url, text, status_code=200):
        self.url = url
        self.content = text.encode('utf-8')
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} for {self.url}")


class FakeWeb:
    """Serves canned pages in place of requests.get and remembers what was asked for."""

    def __init__(self):
        self.pages = {}
        self.calls = []

    def get(self, url, headers=None, **kwargs):
        self.calls.append(url)
        if url not in self.pages:
            raise requests.exceptions.ConnectionError(f"no route to {url}")
        page = self.pages[url]
        if isinstance(page, int):
            return FakeResponse(url, '', status_code=page)
        return FakeResponse(url, page)


@pytest.fixture
def fake_web(monkeypatch):
    web = FakeWeb()
    monkeypatch.setattr(site_variants.requests, 'get', web.get)
    return web


def royal_road_book(web, book_number, titles):
    """Registers a Royal Road book whose chapters are numbered from 100."""
    links = []
    for i, title in enumerate(titles):
        url = f"http://royalroadl.com/fiction/chapter/{100 + i}"
        links.append(f'<a href="{url}">{title}</a>')
        web.pages[url] = ROYAL_ROAD_CHAPTER.format(title=title)
    web.pages[f"http://royalroadl.com/fiction/{book_number}"] = ROYAL_ROAD_BOOK.format(links='\n'.join(links))


def wuxiaworld_book(web, slug, count):
    rows = ''.join(WUXIAWORLD_ROW.format(n=n) for n in range(1, count + 1))
    web.pages[f"http://www.wuxiaworld.com/{slug}"] = WUXIAWORLD_BOOK.format(rows=rows)
    for n in range(1, count + 1):
        url = f"http://www.wuxiaworld.com/mga-index/mga-chapter-{n}/"
        web.pages[url] = WUXIAWORLD_CHAPTER.format(title=f"Chapter {n}")
