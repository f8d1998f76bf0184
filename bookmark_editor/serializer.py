"""Write a bookmark tree back out as a Netscape bookmark file."""

import codecs
import html
import logging
from pathlib import Path
from typing import Iterator, Optional, Union

from tqdm import tqdm

from .config import load_settings
from .model import Bookmark, Folder
from .parser import BookmarkFileError

LOGGER = logging.getLogger(__name__)

INDENT = "    "

PREAMBLE = """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<!-- This is an automatically generated file.
     It will be read and overwritten.
     DO NOT EDIT! -->
<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">
<TITLE>Bookmarks</TITLE>
<H1>Bookmarks</H1>
"""


def iter_bookmark_lines(root: Folder) -> Iterator[str]:
    """Yield the exported file line by line, newline included."""
    yield PREAMBLE
    yield "<DL><p>\n"
    yield from _write_dl(root, 1)
    yield "</DL><p>\n"


def _write_dl(folder: Folder, level: int) -> Iterator[str]:
    pad = INDENT * level
    for child in folder.children:
        if isinstance(child, Folder):
            yield f"{pad}<DT><H3>{html.escape(child.name)}</H3>\n"
            yield f"{pad}<DL><p>\n"
            yield from _write_dl(child, level + 1)
            yield f"{pad}</DL><p>\n"
        elif isinstance(child, Bookmark):
            yield f"{pad}<DT><A{_anchor_attributes(child)}>{html.escape(child.name)}</A>\n"


def _anchor_attributes(bookmark: Bookmark) -> str:
    attrs = f' HREF="{html.escape(bookmark.url)}"'
    if bookmark.add_date:
        attrs += f' ADD_DATE="{html.escape(bookmark.add_date)}"'
    if bookmark.icon:
        attrs += f' ICON="{html.escape(bookmark.icon)}"'
    return attrs


def serialize_bookmarks(root: Folder) -> str:
    return "".join(iter_bookmark_lines(root))


def save_bookmarks(root: Folder, path: Union[str, Path], encoding: Optional[str] = None,
                   progress: bool = False) -> Path:
    """Export `root` to `path`, optionally showing a progress bar."""
    path = Path(path)
    encoding = encoding or load_settings().encoding
    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise BookmarkFileError(f"Cannot write {path}: {e}") from e

    lines = list(iter_bookmark_lines(root))
    try:
        with path.open("w", encoding=encoding) as f:
            for line in tqdm(lines, desc="Writing HTML", unit="line", disable=not progress):
                f.write(line)
    except OSError as e:
        raise BookmarkFileError(f"Cannot write {path}: {e.strerror or e}") from e
    except UnicodeEncodeError as e:
        raise BookmarkFileError(f"Cannot encode bookmarks for {path}: {e.reason}") from e

    LOGGER.debug("Wrote %d lines to %s", len(lines), path)
    return path
