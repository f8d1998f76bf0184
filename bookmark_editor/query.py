"""Read-only lookups over a bookmark tree: paths, parents, counts and search."""

from typing import Iterator, List, NamedTuple, Optional

from .model import Bookmark, Folder, Node

PATH_SEPARATOR = "/"


class FolderCounts(NamedTuple):
    bookmarks: int
    folders: int


def iter_nodes(folder: Folder) -> Iterator[Node]:
    """Yield every node below `folder` in pre-order."""
    for child in folder.children:
        yield child
        if isinstance(child, Folder):
            yield from iter_nodes(child)


def folder_trail(root: Folder, node: Node) -> Optional[List[Node]]:
    """Return the nodes from `root` down to `node` inclusive, or None if absent."""
    if node is root:
        return [root]
    for child in root.children:
        if child is node:
            return [root, child]
        if isinstance(child, Folder):
            trail = folder_trail(child, node)
            if trail is not None:
                return [root] + trail
    return None


def _path_id(parent_path: str, node: Node) -> str:
    return parent_path + PATH_SEPARATOR + node.name


def resolve_path(root: Folder, node: Node) -> Optional[str]:
    """Build the path id of `node`, e.g. "/Bookmarks/Work/Docs".

    Path ids change when an ancestor is renamed and collide for siblings with
    the same name, so use them for display only; node.id is the stable key.
    """
    trail = folder_trail(root, node)
    if trail is None:
        return None
    path = ""
    for item in trail:
        path = _path_id(path, item)
    return path


def find_folder(root: Folder, path_id: str, parent_path: str = "") -> Optional[Folder]:
    """Depth-first search for the first folder whose path id is `path_id`."""
    current = _path_id(parent_path, root)
    if current == path_id:
        return root
    for child in root.children:
        if isinstance(child, Folder):
            found = find_folder(child, path_id, current)
            if found is not None:
                return found
    return None


def find_node(root: Folder, node_id: int) -> Optional[Node]:
    if root.id == node_id:
        return root
    for node in iter_nodes(root):
        if node.id == node_id:
            return node
    return None


def find_parent(root: Folder, node: Node) -> Optional[Folder]:
    """Return the folder whose children directly include `node` (by identity)."""
    for child in root.children:
        if child is node:
            return root
        if isinstance(child, Folder):
            found = find_parent(child, node)
            if found is not None:
                return found
    return None


def contains(root: Folder, node: Node) -> bool:
    return node is root or find_parent(root, node) is not None


def is_descendant(ancestor: Node, node: Node) -> bool:
    """True if `node` is `ancestor` itself or lies anywhere below it."""
    if ancestor is node:
        return True
    if not isinstance(ancestor, Folder):
        return False
    return any(child is node for child in iter_nodes(ancestor))


def count_descendant_bookmarks(folder: Folder) -> FolderCounts:
    """Count bookmarks at any depth and subfolders one level down."""
    bookmarks = 0
    folders = 0
    for child in folder.children:
        if isinstance(child, Bookmark):
            bookmarks += 1
        elif isinstance(child, Folder):
            folders += 1
            bookmarks += count_descendant_bookmarks(child).bookmarks
    return FolderCounts(bookmarks, folders)


def count_items(folder: Folder) -> int:
    return sum(1 for _ in iter_nodes(folder))


def search(folder: Folder, query: Optional[str]) -> List[Bookmark]:
    """Find bookmarks whose name or URL contains `query`, ignoring case.

    Results come in pre-order. A blank query matches every bookmark.
    """
    needle = (query or "").strip().lower()
    return [
        node for node in iter_nodes(folder)
        if isinstance(node, Bookmark)
        and (needle in node.name.lower() or needle in node.url.lower())
    ]


def display_order(folder: Folder) -> List[Node]:
    """Children with folders first, keeping stored order within each group."""
    folders = [child for child in folder.children if isinstance(child, Folder)]
    bookmarks = [child for child in folder.children if isinstance(child, Bookmark)]
    return folders + bookmarks


def tree_stats(node: Folder, stats=None, depth=0):
    """Analyze the tree structure for stats like folder distribution."""
    if stats is None:
        stats = {"total_folders": 0, "total_bookmarks": 0, "folder_sizes": [],
                 "folder_depth": [], "single_bookmark_folders": 0, "empty_folders": 0}

    # The root is not counted as a folder
    if depth:
        stats["total_folders"] += 1
        stats["folder_depth"].append(depth)

    bookmark_count = sum(1 for child in node.children if isinstance(child, Bookmark))
    stats["total_bookmarks"] += bookmark_count
    if bookmark_count:
        stats["folder_sizes"].append(bookmark_count)
    if bookmark_count == 1 and len(node.children) == 1:
        stats["single_bookmark_folders"] += 1
    if depth and not node.children:
        stats["empty_folders"] += 1

    for child in node.children:
        if isinstance(child, Folder):
            tree_stats(child, stats, depth + 1)

    return stats
