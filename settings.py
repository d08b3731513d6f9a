# Configuration for bookscraper, read from the environment or a .env file.
# Every setting is optional; unset values fall back to the defaults below.

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_STYLESHEET = """body { font-family: Georgia, serif; line-height: 1.5; margin: 0 5%; }
h2 { text-align: center; margin: 1em 0; }
p { text-indent: 1.5em; margin: 0 0 0.5em 0; }
"""


@dataclass
class Settings:
    work_dir: Path
    publish_dir: Path | None = None
    stylesheet: str = DEFAULT_STYLESHEET


def _path_from_env(name):
    value = os.getenv(name, "").strip()
    return Path(value).expanduser() if value else None


def load_settings():
    """Loads the BOOKSCRAPER_* settings."""
    load_dotenv()

    stylesheet = DEFAULT_STYLESHEET
    stylesheet_path = _path_from_env("BOOKSCRAPER_STYLESHEET")
    if stylesheet_path:
        stylesheet = stylesheet_path.read_text(encoding="utf-8")

    return Settings(
        work_dir=_path_from_env("BOOKSCRAPER_WORK_DIR") or Path("."),
        publish_dir=_path_from_env("BOOKSCRAPER_PUBLISH_DIR"),
        stylesheet=stylesheet,
    )
