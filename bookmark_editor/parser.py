"""Read Netscape bookmark files (the format every browser exports) into a tree."""

import logging
from pathlib import Path
from typing import Iterator, Optional, Union

from bs4 import BeautifulSoup, Tag

from .config import load_settings
from .model import Folder, make_bookmark, make_folder, make_root

LOGGER = logging.getLogger(__name__)

# Elements that belong to the list structure itself rather than to one entry.
_STRUCTURAL = ("dl", "dt", "dd", "p")


class BookmarkFileError(Exception):
    """Raised when a bookmark file cannot be read or written."""
    pass


def load_bookmarks(path: Union[str, Path], encoding: Optional[str] = None) -> Folder:
    """Read and parse a bookmark file.

    Raises BookmarkFileError if the file is missing, unreadable or not text.
    A readable file without any bookmarks gives an empty root folder.
    """
    settings = load_settings()
    path = Path(path)
    try:
        text = path.read_text(encoding=encoding or settings.encoding)
    except UnicodeDecodeError as e:
        raise BookmarkFileError(f"{path} is not a text file ({e.reason})") from e
    except OSError as e:
        raise BookmarkFileError(f"Cannot read {path}: {e.strerror or e}") from e
    except LookupError as e:
        raise BookmarkFileError(f"Cannot read {path}: {e}") from e

    if "\x00" in text:
        raise BookmarkFileError(f"{path} is not a text file (contains NUL bytes)")

    LOGGER.debug("Loaded %s, %d characters", path, len(text))
    return parse_bookmarks(text, features=settings.html_parser)


def parse_bookmarks(text: str, features: Optional[str] = None) -> Folder:
    """Parse bookmark markup into a root folder.

    Nothing recognisable in the input means a root without children, never an
    exception.
    """
    root = make_root()
    if not text or not text.strip():
        return root

    soup = BeautifulSoup(text, features or load_settings().html_parser)
    main_list = soup.find("dl")

    if main_list is not None:
        _parse_list(main_list, root)
    else:
        # No list structure at all: take every link as a top-level bookmark
        anchors = soup.find_all("a", href=True)
        LOGGER.debug("No <DL> found, falling back to %d anchors", len(anchors))
        for anchor in anchors:
            href = anchor.get("href", "").strip()
            if not href or href.lower().startswith("javascript:"):
                continue
            root.children.append(_bookmark_from_anchor(anchor))

    LOGGER.debug("Parsed %d top-level items", len(root.children))
    return root


def _parse_list(element: Tag, folder: Folder):
    """Add the entries of a <DL> (or similar) element to `folder`, recursively."""
    entries = list(_list_entries(element))
    i = 0
    while i < len(entries):
        entry = entries[i]
        i += 1

        if entry.name == "dt":
            header = _own_child(entry, "h3")
            anchor = _own_child(entry, "a")

            if header is not None:
                child = make_folder(header.get_text())
                folder.children.append(child)

                nested = _own_child(entry, "dl")
                # Some exports put the folder's list right after the <DT> instead of inside it
                if nested is None and i < len(entries) and entries[i].name in ("dl", "dd"):
                    following = entries[i]
                    nested = following if following.name == "dl" else _own_child(following, "dl")
                    i += 1

                if nested is not None:
                    _parse_list(nested, child)

            elif anchor is not None:
                folder.children.append(_bookmark_from_anchor(anchor))

        elif entry.name == "dl":
            _parse_list(entry, folder)

        elif entry.name == "dd":
            nested = _own_child(entry, "dl")
            if nested is not None:
                _parse_list(nested, folder)


def _list_entries(element: Tag) -> Iterator[Tag]:
    """Yield the <DT>, <DD> and <DL> entries of a list in document order.

    Unclosed <DT> and <P> tags are common in these files. Lenient tree builders
    nest every following entry inside the previous one, so <P> wrappers are
    looked through and entries found inside an entry are yielded as its
    siblings. Walks with an explicit stack since long lists nest deeply.
    """
    stack = [iter(element.children)]
    while stack:
        node = next(stack[-1], None)
        if node is None:
            stack.pop()
            continue
        if not isinstance(node, Tag):
            continue

        if node.name in ("dt", "dd"):
            yield node
            stack.append(_tags_named(node, ("dt", "dd", "p")))
        elif node.name == "p":
            stack.append(iter(node.children))
        elif node.name == "dl":
            yield node


def _tags_named(element: Tag, names) -> Iterator[Tag]:
    return (child for child in element.children
            if isinstance(child, Tag) and child.name in names)


def _own_child(entry: Tag, name: str) -> Optional[Tag]:
    """Find the `name` element belonging to this entry, not to a nested one."""
    for child in entry.children:
        if not isinstance(child, Tag):
            continue
        if child.name == name:
            return child
        if child.name in _STRUCTURAL:
            continue
        found = child.find(name)
        if found is not None:
            return found
    return None


def _bookmark_from_anchor(anchor: Tag):
    href = (anchor.get("href") or "").strip()
    return make_bookmark(
        name=anchor.get_text().strip() or href,
        url=href or "#",
        icon=anchor.get("icon", ""),
        add_date=anchor.get("add_date", ""),
    )
