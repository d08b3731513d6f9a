# Books and chapters as they are scraped from a site.
# Pages are fetched on first use and kept for the lifetime of the object.

import html
import re
from functools import cached_property

import pandas as pd
import requests

from site_variants import fetch_page
from text_normalizer import normalize

STYLESHEET_NAME = 'royal_road.css'
MAX_FILENAME_LEN = 120

_WINDOWS_RESERVED_NAMES = {
    'CON', 'PRN', 'AUX', 'NUL',
    *(f'COM{i}' for i in range(1, 10)),
    *(f'LPT{i}' for i in range(1, 10)),
}


class ScrapeError(Exception):
    """A book or chapter could not be scraped. Carries the locator and the stage that failed."""

    def __init__(self, locator, stage, message):
        super().__init__(f"{stage} failed for {locator}: {message}")
        self.locator = locator
        self.stage = stage


def safe_filename(name, default='chapter', max_length=MAX_FILENAME_LEN):
    """
    Strips path separators and characters Windows won't accept so a title can be used
    as a file name.
    """
    name = re.sub(r'[\\/:*?"<>|]+', '', name)
    name = re.sub(r'\s+', ' ', name).strip()
    name = name[:max_length].rstrip(' .')
    if not name:
        name = default
    if name.upper() in _WINDOWS_RESERVED_NAMES:
        name = f'_{name}'
    return name


def document_name(title):
    """
    Turns a chapter title into a name that is safe inside an EPUB href: only letters,
    digits, '_' and '-' survive, so characters like '#' or '%' can't be read as a
    fragment or an escape.
    """
    name = re.sub(r'[^\w\s-]+', '', safe_filename(title))
    name = re.sub(r'\s+', '_', name.strip())
    return safe_filename(name)


def _load(locator, url):
    print(f"Fetching {url}")
    try:
        return fetch_page(url)
    except requests.exceptions.RequestException as e:
        raise ScrapeError(locator, 'fetch', str(e)) from e


class Chapter:
    def __init__(self, locator, site):
        self.locator = locator
        self.site = site

    @property
    def url(self):
        return self.site.chapter_url(self.locator)

    @cached_property
    def page(self):
        return _load(self.locator, self.url)

    @cached_property
    def title(self):
        title = self.site.chapter_title(self.page)
        if not title:
            raise ScrapeError(self.locator, 'title', f"no chapter title found at {self.url}")
        return title

    @cached_property
    def text(self):
        text = self.site.chapter_body(self.page)
        if not text:
            raise ScrapeError(self.locator, 'body', f"no chapter content found at {self.url}")
        return text

    @property
    def formatted_text(self):
        return normalize(self.text)

    @property
    def formatted_chapter(self):
        return f"<h2>{html.escape(normalize(self.title))}</h2><br>" + self.formatted_text

    @property
    def html_text(self):
        """The chapter as a complete HTML document, linked to the shared stylesheet."""
        return (
            "<html>\n"
            "  <head>\n"
            f'    <link href="../{STYLESHEET_NAME}" type="text/css" rel="stylesheet"/>\n'
            "  </head>\n"
            "  <body>\n"
            f"    {self.formatted_chapter}\n"
            "  </body>\n"
            "</html>\n"
        )

    @property
    def file_name(self):
        return f"text/{document_name(self.title)}.xhtml"

    def __repr__(self):
        return f"Chapter({self.locator!r}, {self.site.name})"


class Book:
    def __init__(self, locator, site):
        self.locator = locator
        self.site = site

    @property
    def url(self):
        return self.site.book_url(self.locator)

    @cached_property
    def page(self):
        return _load(self.locator, self.url)

    @cached_property
    def title(self):
        title = self.site.book_title(self.page)
        if not title:
            raise ScrapeError(self.locator, 'book-title', f"no book title found at {self.url}")
        return title

    @cached_property
    def author(self):
        return self.site.book_author(self.page)

    @cached_property
    def chapter_locators(self):
        locators = self.site.discover_chapter_locators(self.page)
        if not locators:
            raise ScrapeError(self.locator, 'chapters', f"no chapter links found at {self.url}")
        return locators

    @cached_property
    def chapters(self):
        return [Chapter(locator, self.site) for locator in self.chapter_locators]

    def book_content(self):
        """
        Scrapes every chapter in reading order into a DataFrame with one row per chapter.
        File names are made unique by numbering repeats ("Prologue", "Prologue-2", ...).
        """
        rows = []
        used_names = set()
        for i, chapter in enumerate(self.chapters):
            print(f'Scraping chapter {i+1}/{len(self.chapters)}: {chapter.title}')
            file_name = chapter.file_name
            stem, ext = file_name.rsplit('.', 1)
            n = 2
            while file_name.lower() in used_names:
                file_name = f"{stem}-{n}.{ext}"
                n += 1
            used_names.add(file_name.lower())
            rows.append({'title': chapter.title, 'text': chapter.html_text, 'file_name': file_name})

        return pd.DataFrame(rows, columns=['title', 'text', 'file_name'])

    def __repr__(self):
        return f"Book({self.locator!r}, {self.site.name})"
