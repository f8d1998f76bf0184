"""Load, edit and export Netscape-format bookmark files."""

from .model import (
    Bookmark,
    Folder,
    Node,
    ROOT_NAME,
    make_bookmark,
    make_folder,
    make_root,
)
from .parser import BookmarkFileError, load_bookmarks, parse_bookmarks
from .serializer import save_bookmarks, serialize_bookmarks
from .query import (
    FolderCounts,
    count_descendant_bookmarks,
    count_items,
    display_order,
    find_folder,
    find_node,
    find_parent,
    folder_trail,
    is_descendant,
    iter_nodes,
    resolve_path,
    search,
    tree_stats,
)
from .editor import BookmarkEditor, UndoRecord, detach

__all__ = [
    # Model
    "Bookmark",
    "Folder",
    "Node",
    "ROOT_NAME",
    "make_bookmark",
    "make_folder",
    "make_root",
    # Import / export
    "BookmarkFileError",
    "load_bookmarks",
    "parse_bookmarks",
    "save_bookmarks",
    "serialize_bookmarks",
    # Queries
    "FolderCounts",
    "count_descendant_bookmarks",
    "count_items",
    "display_order",
    "find_folder",
    "find_node",
    "find_parent",
    "folder_trail",
    "is_descendant",
    "iter_nodes",
    "resolve_path",
    "search",
    "tree_stats",
    # Editing
    "BookmarkEditor",
    "UndoRecord",
    "detach",
]
