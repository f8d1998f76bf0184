from bookmark_editor import Bookmark, Folder, make_bookmark, make_folder, make_root
from bookmark_editor.model import UNNAMED_BOOKMARK, UNNAMED_FOLDER


def test_factories_trim_names_and_fall_back_to_placeholders():
    assert make_folder("  Work ").name == "Work"
    assert make_folder("").name == UNNAMED_FOLDER
    assert make_folder(None).name == UNNAMED_FOLDER
    assert make_bookmark("   ", "https://x.com").name == UNNAMED_BOOKMARK

    bookmark = make_bookmark("X", "https://x.com", icon=None)
    assert bookmark.icon == ""
    assert bookmark.add_date == ""


def test_kind_discriminant():
    assert Folder("F").kind == "folder"
    assert Bookmark("B", "https://b.example").kind == "bookmark"


def test_ids_are_unique_and_ignored_by_equality():
    a = Folder("Same", [Bookmark("B", "https://b.example")])
    b = Folder("Same", [Bookmark("B", "https://b.example")])
    assert a.id != b.id
    assert a.children[0].id != b.children[0].id
    assert a == b


def test_root_is_named_bookmarks():
    root = make_root()
    assert root.name == "Bookmarks"
    assert root.children == []
