"""Editing operations on a bookmark tree, with one step of undo for moves."""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .model import Bookmark, Folder, Node, make_bookmark, make_folder, make_root
from .query import contains, find_node, find_parent, is_descendant, iter_nodes

LOGGER = logging.getLogger(__name__)

NodeRef = Union[Node, int]


@dataclass
class UndoRecord:
    """Everything needed to put a moved node back where it was."""
    operation: str
    item: Node
    source: Folder
    target: Folder
    index: int


def detach(folder: Folder, target: Node) -> bool:
    """Remove the first reference to `target` found below `folder` (pre-order)."""
    for i, child in enumerate(folder.children):
        if child is target:
            del folder.children[i]
            return True
        if isinstance(child, Folder) and detach(child, target):
            return True
    return False


def _writable(node: Node) -> bool:
    # Names and URLs must already be trimmed and non-blank to survive a save and reload.
    if not node.name.strip() or node.name != node.name.strip():
        return False
    if isinstance(node, Bookmark):
        return bool(node.url.strip()) and node.url == node.url.strip()
    return True


class BookmarkEditor:
    """Owns a bookmark tree and applies validated edits to it.

    Every operation takes nodes or node ids and reports success with a bool
    (or the created node). Rejected requests leave the tree untouched.
    """

    def __init__(self, root: Optional[Folder] = None):
        self.root = root if root is not None else make_root()
        self.last_operation: Optional[UndoRecord] = None

    def load(self, root: Folder):
        """Replace the whole tree, e.g. after reading a new file."""
        self.root = root
        self.last_operation = None

    @property
    def can_undo(self) -> bool:
        return self.last_operation is not None and self.last_operation.operation == "move"

    def resolve(self, ref: Optional[NodeRef]) -> Optional[Node]:
        """Turn a node or node id into a node of this tree, or None."""
        if ref is None or isinstance(ref, bool):
            return None
        if isinstance(ref, int):
            return find_node(self.root, ref)
        return ref if contains(self.root, ref) else None

    def _folder(self, ref: Optional[NodeRef]) -> Optional[Folder]:
        node = self.resolve(ref)
        return node if isinstance(node, Folder) else None

    # ---------- creation -----------------------------------------------------

    def insert(self, parent: NodeRef, node: Node) -> bool:
        folder = self._folder(parent)
        if folder is None:
            LOGGER.debug("Insert rejected: parent %r is not a folder in the tree", parent)
            return False
        if contains(self.root, node):
            LOGGER.debug("Insert rejected: %r already belongs to the tree", node.name)
            return False
        subtree = [node, *iter_nodes(node)] if isinstance(node, Folder) else [node]
        bad = next((n for n in subtree if not _writable(n)), None)
        if bad is not None:
            LOGGER.debug("Insert rejected: %s %r has a blank or untrimmed name or URL", bad.kind, bad.name)
            return False
        folder.children.append(node)
        LOGGER.debug("Inserted %s %r into %r", node.kind, node.name, folder.name)
        return True

    def add_folder(self, parent: NodeRef, name: str) -> Optional[Folder]:
        if not (name or "").strip():
            LOGGER.debug("Folder name is required")
            return None
        folder = make_folder(name)
        return folder if self.insert(parent, folder) else None

    def add_bookmark(self, parent: NodeRef, name: str, url: str, icon: str = "") -> Optional[Bookmark]:
        if not (name or "").strip():
            LOGGER.debug("Bookmark name is required")
            return None
        if not (url or "").strip():
            LOGGER.debug("URL is required for bookmarks")
            return None
        bookmark = make_bookmark(name, url.strip(), icon)
        return bookmark if self.insert(parent, bookmark) else None

    # ---------- edits --------------------------------------------------------

    def rename(self, ref: NodeRef, new_name: str) -> bool:
        node = self.resolve(ref)
        name = (new_name or "").strip()
        if node is None or not name:
            LOGGER.debug("Rename rejected for %r", ref)
            return False
        if node is self.root:
            LOGGER.debug("The root folder cannot be renamed")
            return False
        node.name = name
        return True

    def set_url(self, ref: NodeRef, new_url: str) -> bool:
        node = self.resolve(ref)
        url = (new_url or "").strip()
        if not isinstance(node, Bookmark) or not url:
            LOGGER.debug("URL change rejected for %r", ref)
            return False
        node.url = url
        return True

    def delete(self, ref: NodeRef) -> bool:
        node = self.resolve(ref)
        if node is None:
            return False
        if node is self.root:
            LOGGER.debug("The root folder cannot be deleted")
            return False
        removed = detach(self.root, node)
        if removed:
            LOGGER.debug("Deleted %s %r", node.kind, node.name)
        return removed

    def move(self, item_ref: NodeRef, target_ref: NodeRef) -> bool:
        """Move a node to the end of `target_ref`'s children.

        Folders cannot be moved into themselves or their own subfolders, and
        the root cannot be moved at all.
        """
        item = self.resolve(item_ref)
        target = self._folder(target_ref)
        if item is None or target is None or item is target:
            LOGGER.debug("Move rejected: %r -> %r", item_ref, target_ref)
            return False
        if item is self.root:
            LOGGER.debug("The root folder cannot be moved")
            return False
        if isinstance(item, Folder) and is_descendant(item, target):
            LOGGER.debug("Move rejected: %r is inside %r", target.name, item.name)
            return False

        source = find_parent(self.root, item)
        index = next(i for i, child in enumerate(source.children) if child is item)
        self.last_operation = UndoRecord("move", item, source, target, index)

        del source.children[index]
        target.children.append(item)
        LOGGER.debug("Moved %s %r to folder %r", item.kind, item.name, target.name)
        return True

    def undo(self) -> bool:
        """Reverse the last move. Only one step is kept."""
        if not self.can_undo:
            return False

        record = self.last_operation
        self.last_operation = None
        item, source = record.item, record.source
        if not contains(self.root, source) or is_descendant(item, source):
            LOGGER.debug("Cannot undo: %r is no longer a valid destination", source.name)
            return False

        current = find_parent(self.root, item)
        if current is not None:
            current.children[:] = [child for child in current.children if child is not item]
        source.children.insert(min(record.index, len(source.children)), item)
        LOGGER.debug("Undid move: %s %r back to %r", item.kind, item.name, source.name)
        return True
