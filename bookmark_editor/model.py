"""Folder and bookmark nodes that make up a bookmark tree."""

import itertools
from dataclasses import dataclass, field
from typing import ClassVar, List, Optional, Union

ROOT_NAME = "Bookmarks"
UNNAMED_FOLDER = "Unnamed Folder"
UNNAMED_BOOKMARK = "Unnamed Bookmark"

_node_ids = itertools.count(1)


def _next_id() -> int:
    return next(_node_ids)


@dataclass
class Folder:
    """A container node holding an ordered list of child nodes."""
    kind: ClassVar[str] = "folder"

    name: str
    children: List["Node"] = field(default_factory=list)
    id: int = field(default_factory=_next_id, compare=False, repr=False)


@dataclass
class Bookmark:
    """A leaf node pointing at a URL."""
    kind: ClassVar[str] = "bookmark"

    name: str
    url: str
    icon: str = ""
    add_date: str = ""
    id: int = field(default_factory=_next_id, compare=False, repr=False)


Node = Union[Folder, Bookmark]


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def make_folder(name: Optional[str] = None) -> Folder:
    return Folder(name=_clean(name) or UNNAMED_FOLDER)


def make_bookmark(name: Optional[str], url: str, icon: Optional[str] = "",
                  add_date: Optional[str] = "") -> Bookmark:
    return Bookmark(
        name=_clean(name) or UNNAMED_BOOKMARK,
        url=url,
        icon=icon or "",
        add_date=add_date or "",
    )


def make_root() -> Folder:
    return Folder(name=ROOT_NAME)
