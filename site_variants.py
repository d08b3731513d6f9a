# Extraction rules for the two sites the scraper knows about.
# Royal Road (site A) addresses books and chapters by number, Wuxiaworld (site B) by URL.
# Each site is a SiteVariant: a fixed set of functions that turn parsed pages into
# titles, authors, chapter locators and chapter markup.

import re
from dataclasses import dataclass
from typing import Callable

import pandas as pd
import requests
from bs4 import BeautifulSoup, Tag

# Set up headers to mimic a browser request
headers = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36'
}


def fetch_page(url):
    """
    Downloads a page and parses it. Raises requests.exceptions.RequestException on failure.
    """
    response = requests.get(url, headers=headers)
    response.raise_for_status()  # Raise an exception for bad status codes
    return BeautifulSoup(response.content, 'html.parser')


@dataclass(frozen=True)
class SiteVariant:
    """The selectors and URL templates for one source site."""
    name: str
    book_url: Callable[[str], str]
    book_title: Callable[[BeautifulSoup], str]
    book_author: Callable[[BeautifulSoup], str]
    discover_chapter_locators: Callable[[BeautifulSoup], list]
    chapter_url: Callable[[str], str]
    chapter_title: Callable[[BeautifulSoup], str]
    chapter_body: Callable[[BeautifulSoup], str]


def _hrefs(soup):
    return [a['href'] for a in soup.find_all('a', href=True)]


def _joined_text(soup, selector):
    return ''.join(tag.get_text() for tag in soup.select(selector)).strip()


# --- Royal Road ---

ROYAL_ROAD_BASE = 'http://royalroadl.com'


def royal_road_book_url(book_number):
    return f"{ROYAL_ROAD_BASE}/fiction/{book_number}"


def royal_road_chapter_url(chapter_number):
    return f"{ROYAL_ROAD_BASE}/fiction/chapter/{chapter_number}"


def royal_road_title(soup):
    return _joined_text(soup, '.fic-header h2')


def royal_road_author(soup):
    """
    The byline header reads something like "by <a>...</a> Author Name"; the author is
    whatever comes last inside it.
    """
    byline = soup.select_one('.fic-header h4')
    if byline is None or not byline.contents:
        return ''
    last = byline.contents[-1]
    text = last.get_text() if isinstance(last, Tag) else str(last)
    return text.strip()


def royal_road_chapter_locators(soup):
    """
    Returns chapter numbers in page order. The first chapter link on the page is the
    "Start Reading" button, so it is skipped.
    """
    chapter_links = [link for link in _hrefs(soup) if re.search(r'fiction/chapter', link, re.IGNORECASE)]
    return [link.rstrip('/').split('/')[-1] for link in chapter_links[1:]]


def royal_road_chapter_body(soup):
    return ''.join(str(tag) for tag in soup.select('.chapter-content'))


ROYAL_ROAD = SiteVariant(
    name='royalroad',
    book_url=royal_road_book_url,
    book_title=royal_road_title,
    book_author=royal_road_author,
    discover_chapter_locators=royal_road_chapter_locators,
    chapter_url=royal_road_chapter_url,
    chapter_title=royal_road_title,
    chapter_body=royal_road_chapter_body,
)


# --- Wuxiaworld ---

WUXIAWORLD_BASE = 'http://www.wuxiaworld.com'

# The book header ends with a fixed "N Chapters, M Pages"-style suffix
TITLE_SUFFIX_WORDS = 3


def wuxiaworld_book_url(locator):
    if re.match(r'https?://', locator):
        return locator
    return f"{WUXIAWORLD_BASE}/{locator.lstrip('/')}"


def wuxiaworld_chapter_url(locator):
    return locator


def wuxiaworld_chapter_title(soup):
    return _joined_text(soup, '.entry-header h1')


def wuxiaworld_book_title(soup):
    words = wuxiaworld_chapter_title(soup).split()
    return ' '.join(words[:-TITLE_SUFFIX_WORDS])


def wuxiaworld_author(soup):
    # The book pages don't list an author
    return 'unknown'


def _index_token(link):
    parts = link.split('/')
    return parts[3] if len(parts) > 3 and parts[3] else None


def wuxiaworld_chapter_locators(soup):
    """
    Returns chapter URLs in page order.

    Every chapter row on the index page links to several pages that all contain
    "-chapter-" in the URL, but only the links to the chapters themselves share the
    index page's own path segment. That segment is the one that shows up most often,
    so it is used to pick out the real chapter links. On a tie the segment seen
    first wins.
    """
    book_page_links = [link for link in _hrefs(soup) if re.search(r'-chapter-', link, re.IGNORECASE)]
    tokens = pd.Series([_index_token(link) for link in book_page_links], dtype=object)
    if tokens.dropna().empty:
        return []

    index_text = tokens.groupby(tokens, sort=False).size().idxmax()
    print(f"Chapter index: {index_text}")
    return [link for link in book_page_links if re.search(re.escape(index_text), link, re.IGNORECASE)]


def wuxiaworld_chapter_body(soup):
    body = soup.select_one('div[itemprop="articleBody"]')
    return str(body) if body is not None else ''


WUXIAWORLD = SiteVariant(
    name='wuxiaworld',
    book_url=wuxiaworld_book_url,
    book_title=wuxiaworld_book_title,
    book_author=wuxiaworld_author,
    discover_chapter_locators=wuxiaworld_chapter_locators,
    chapter_url=wuxiaworld_chapter_url,
    chapter_title=wuxiaworld_chapter_title,
    chapter_body=wuxiaworld_chapter_body,
)
