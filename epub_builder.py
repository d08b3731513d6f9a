# Packages a scraped Book into an EPUB file.
# Chapters are written to text/ while the book is assembled and removed again afterwards.

import shutil
from pathlib import Path

from ebooklib import epub

from book_models import STYLESHEET_NAME, ScrapeError, safe_filename
from settings import DEFAULT_STYLESHEET


def move_to_directory(destination):
    """
    Returns a publish callback that moves the finished EPUB into `destination`.
    """
    destination = Path(destination)

    def publish(path):
        destination.mkdir(parents=True, exist_ok=True)
        target = destination / Path(path).name
        shutil.move(str(path), str(target))
        print(f"Moved EPUB to '{target}'")
        return target

    return publish


class EpubBuilder:
    def __init__(self, book, work_dir='.', stylesheet=DEFAULT_STYLESHEET, publish=None):
        self.book = book
        self.work_dir = Path(work_dir)
        self.stylesheet = stylesheet
        self.publish = publish
        self.draft = epub.EpubBook()
        self.written_files = []

    def set_book_attributes(self):
        self.draft.set_identifier(self.book.url)
        self.draft.add_metadata('DC', 'identifier', self.book.url, {
            'id': 'url',
            f"{{{epub.NAMESPACES['OPF']}}}scheme": 'URL',
        })
        self.draft.set_title(self.book.title)
        self.draft.set_language('en')
        self.draft.add_author(self.book.author, role='aut')

    def add_css(self):
        """
        Registers the shared stylesheet once. Chapters link to it as their style, the
        navigation document links to it as its css.
        """
        self.css = epub.EpubItem(uid='style', file_name=STYLESHEET_NAME, media_type='text/css', content=self.stylesheet)
        self.draft.add_item(self.css)

    def write_chapter_file(self, file_name, text):
        path = self.work_dir / file_name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding='utf-8')
        self.written_files.append(path)
        return path

    def delete_chapter_files(self):
        for path in self.written_files:
            path.unlink(missing_ok=True)
        self.written_files = []

        text_dir = self.work_dir / 'text'
        if text_dir.is_dir() and not any(text_dir.iterdir()):
            text_dir.rmdir()

    def add_book_chapters(self):
        """
        Adds every chapter, in reading order, to the manifest, the spine and the table of contents.
        """
        chapters = []
        novel_df = self.book.book_content()

        for i, row in novel_df.iterrows():
            path = self.write_chapter_file(row['file_name'], row['text'])
            try:
                chapter = epub.EpubHtml(title=row['title'], file_name=row['file_name'], lang='en')
                chapter.content = path.read_text(encoding='utf-8')
                # Chapters live under text/, the stylesheet sits next to the package document
                chapter.add_link(href=f"../{STYLESHEET_NAME}", rel='stylesheet', type='text/css')
                self.draft.add_item(chapter)
            except Exception as e:
                locator = self.book.chapters[i].locator
                raise ScrapeError(locator, 'package', f"could not add chapter '{row['title']}': {e}") from e
            chapters.append(chapter)

        # Define the spine and table of contents
        self.draft.toc = tuple(chapters)
        self.draft.spine = chapters

        # Add NCX and Navigation (for EPUB readers)
        self.draft.add_item(epub.EpubNcx())
        nav = epub.EpubNav()
        nav.add_item(self.css)
        self.draft.add_item(nav)

    def output_path(self):
        return self.work_dir / f"{safe_filename(self.book.title, default='book')}.epub"

    def build_book(self):
        """
        Scrapes the whole book and writes it out as one EPUB. Returns the path of the
        file, after it has been published if a publish callback was given.
        """
        print(f"Novel: {self.book.title}, Author: {self.book.author}")
        output = self.output_path()
        writing = False

        try:
            self.set_book_attributes()
            self.add_css()
            self.add_book_chapters()

            print(f"\nCreating EPUB file: {output}...")
            writing = True
            epub.write_epub(str(output), self.draft, {'raise_exceptions': True})
        except BaseException:
            # Never leave a half-written book behind
            if writing:
                output.unlink(missing_ok=True)
            raise
        finally:
            self.delete_chapter_files()

        print(f"EPUB file '{output}' created successfully.")

        if self.publish is not None:
            output = self.publish(output)
        return output
