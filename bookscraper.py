# Web Novel Scraper and EPUB Converter
# This script scrapes a novel from Royal Road or Wuxiaworld and packages the chapters
# into a single EPUB file with a table of contents and a shared stylesheet.
# Royal Road books are given by their number, Wuxiaworld books by their URL (or URL path).

import argparse
import sys

from book_models import Book, ScrapeError
from epub_builder import EpubBuilder, move_to_directory
from settings import load_settings
from site_variants import ROYAL_ROAD, WUXIAWORLD


def select_site(locator):
    """
    Picks the site from the locator: a positive whole number is a Royal Road book id,
    anything else is a Wuxiaworld book.
    """
    try:
        book_number = int(locator)
    except ValueError:
        return WUXIAWORLD, locator

    if book_number > 0:
        return ROYAL_ROAD, str(book_number)
    return WUXIAWORLD, locator


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Scrape a novel and save it as an EPUB.")
    parser.add_argument('locator', type=str, help='Royal Road book number (e.g. 5701) or Wuxiaworld book URL.')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    site, locator = select_site(args.locator)
    print(f"Site: {site.name}")

    try:
        settings = load_settings()
        publish = move_to_directory(settings.publish_dir) if settings.publish_dir else None
        builder = EpubBuilder(Book(locator, site), work_dir=settings.work_dir, stylesheet=settings.stylesheet, publish=publish)
        output = builder.build_book()
    except (ScrapeError, OSError) as e:
        print(f"ERROR: {e}")
        return 1

    print(f"Scraping and EPUB conversion complete! EPUB saved as '{output}'")
    return 0


# Command-line argument parsing
if __name__ == "__main__":
    sys.exit(main())
