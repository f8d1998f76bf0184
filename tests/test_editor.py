import copy

import pytest

from bookmark_editor import (
    Bookmark,
    BookmarkEditor,
    Folder,
    detach,
    make_root,
    parse_bookmarks,
    serialize_bookmarks,
)


@pytest.fixture
def editor(tree):
    return BookmarkEditor(tree.root)


def test_new_editor_has_empty_root():
    editor = BookmarkEditor()

    assert editor.root.name == "Bookmarks"
    assert editor.root.children == []
    assert not editor.can_undo


def test_insert_appends(editor, tree):
    node = Bookmark("New", "https://new.example")

    assert editor.insert(tree.dev, node)
    assert tree.dev.children[-1] is node
    assert editor.last_operation is None


def test_insert_accepts_ids(editor, tree):
    node = Folder("Sub")

    assert editor.insert(tree.personal.id, node)
    assert tree.personal.children[-1] is node


def test_insert_rejects_bad_parent_or_existing_node(editor, tree):
    before = copy.deepcopy(tree.root)

    assert not editor.insert(tree.github, Bookmark("x", "https://x.example"))
    assert not editor.insert(Folder("Detached"), Bookmark("x", "https://x.example"))
    assert not editor.insert(tree.personal, tree.github)
    assert not editor.insert(tree.dev, tree.root)
    assert tree.root == before


@pytest.mark.parametrize("node", [
    Bookmark("X", ""),
    Bookmark("X", "   "),
    Bookmark("X", " https://x.example"),
    Bookmark(" X ", "https://x.example"),
    Bookmark("", "https://x.example"),
    Folder(""),
    Folder("Sub ", []),
    Folder("Sub", [Bookmark("Inner", "")]),
])
def test_insert_rejects_blank_or_untrimmed_fields(editor, tree, node):
    before = copy.deepcopy(tree.root)

    assert not editor.insert(tree.personal, node)
    assert tree.root == before


def test_tree_built_with_insert_survives_round_trip():
    editor = BookmarkEditor()
    reading = Folder("Reading", [Bookmark("Article", "https://read.example")])

    assert editor.insert(editor.root, reading)
    assert editor.insert(reading, Bookmark("Notes", "https://notes.example", icon="data:image/png;base64,AA"))
    assert parse_bookmarks(serialize_bookmarks(editor.root)) == editor.root


def test_add_folder_and_bookmark_validate_input(editor, tree):
    folder = editor.add_folder(tree.root, "  Reading ")
    bookmark = editor.add_bookmark(folder, "Article", " https://read.example ")

    assert folder.name == "Reading"
    assert bookmark.url == "https://read.example"
    assert folder.children == [bookmark]
    assert editor.add_folder(tree.root, "   ") is None
    assert editor.add_bookmark(tree.root, "", "https://x.example") is None
    assert editor.add_bookmark(tree.root, "No URL", " ") is None
    assert editor.add_bookmark(tree.github, "Into a bookmark", "https://x.example") is None


def test_rename(editor, tree):
    assert editor.rename(tree.dev, "  Development ")
    assert tree.dev.name == "Development"
    assert editor.rename(tree.github.id, "GH")
    assert tree.github.name == "GH"


@pytest.mark.parametrize("name", ["", "   ", None])
def test_rename_rejects_empty_names(editor, tree, name):
    assert not editor.rename(tree.github, name)
    assert tree.github.name == "GitHub"


def test_rename_refuses_root(editor, tree):
    assert not editor.rename(tree.root, "Mine")
    assert not editor.rename(tree.root.id, "Mine")
    assert tree.root.name == "Bookmarks"
    assert parse_bookmarks(serialize_bookmarks(tree.root)) == tree.root


def test_rename_rejects_nodes_outside_the_tree(editor):
    stray = Folder("Stray")

    assert not editor.rename(stray, "Other")
    assert stray.name == "Stray"


def test_set_url(editor, tree):
    assert editor.set_url(tree.news, " https://lobste.rs ")
    assert tree.news.url == "https://lobste.rs"


def test_set_url_rejects_folders_and_empty_urls(editor, tree):
    assert not editor.set_url(tree.dev, "https://x.example")
    assert not editor.set_url(tree.news, "  ")
    assert tree.news.url == "https://news.example.com"


def test_delete(editor, tree):
    assert editor.delete(tree.dev)
    assert tree.work.children == [tree.github]
    assert not editor.delete(tree.dev)


def test_delete_root_is_refused(editor, tree):
    before = copy.deepcopy(tree.root)

    assert not editor.delete(tree.root)
    assert not editor.delete(tree.root.id)
    assert tree.root == before


def test_delete_missing_node_fails(editor, tree):
    assert not editor.delete(Bookmark("GitHub", "https://github.com"))
    assert not editor.delete(-1)
    assert len(tree.work.children) == 2


@pytest.mark.parametrize("flag", [True, False])
def test_booleans_are_not_node_ids(editor, tree, flag):
    before = copy.deepcopy(tree.root)

    assert editor.resolve(flag) is None
    assert not editor.delete(flag)
    assert not editor.rename(flag, "Other")
    assert not editor.move(flag, tree.personal)
    assert tree.root == before


def test_detach_removes_by_identity():
    twin_a = Bookmark("Same", "https://same.example")
    twin_b = Bookmark("Same", "https://same.example")
    root = make_root()
    root.children = [Folder("F", [twin_a]), twin_b]

    assert detach(root, twin_b)
    assert root.children[0].children[0] is twin_a
    assert len(root.children) == 1


def test_move(editor, tree):
    assert editor.move(tree.github, tree.personal)

    assert tree.work.children == [tree.dev]
    assert tree.personal.children[-1] is tree.github
    record = editor.last_operation
    assert record.operation == "move"
    assert record.item is tree.github
    assert record.source is tree.work
    assert record.target is tree.personal


def test_move_by_id(editor, tree):
    assert editor.move(tree.dev.id, tree.root.id)
    assert tree.root.children[-1] is tree.dev


def test_move_into_itself_or_descendant_fails(editor, tree):
    before = copy.deepcopy(tree.root)

    assert not editor.move(tree.work, tree.work)
    assert not editor.move(tree.work, tree.dev)
    assert not editor.move(tree.root, tree.dev)
    assert tree.root == before
    assert editor.last_operation is None


def test_move_rejects_invalid_targets(editor, tree):
    assert not editor.move(tree.gitea, tree.github)
    assert not editor.move(tree.gitea, Folder("Detached"))
    assert not editor.move(Bookmark("Detached", "https://x.example"), tree.dev)
    assert tree.dev.children == [tree.gitea]


def test_move_to_current_parent_reorders_to_end(editor, tree):
    assert editor.move(tree.github, tree.work)

    assert tree.work.children == [tree.dev, tree.github]
    assert editor.move(tree.github, tree.work)
    assert tree.work.children == [tree.dev, tree.github]


def test_undo_restores_original_position(editor, tree):
    assert editor.move(tree.github, tree.dev)
    assert editor.undo()

    assert tree.work.children[0] is tree.github
    assert tree.dev.children == [tree.gitea]
    assert editor.last_operation is None


def test_second_undo_is_a_no_op(editor, tree):
    editor.move(tree.dev, tree.personal)
    assert editor.undo()
    snapshot = copy.deepcopy(tree.root)

    assert not editor.undo()
    assert tree.root == snapshot


def test_undo_without_move(editor, tree):
    editor.rename(tree.github, "Renamed")
    editor.add_folder(tree.root, "New")
    editor.delete(tree.news)

    assert not editor.can_undo
    assert not editor.undo()


def test_only_last_move_is_undone(editor, tree):
    editor.move(tree.github, tree.personal)
    editor.move(tree.news, tree.dev)

    assert editor.undo()
    assert tree.personal.children == [tree.news, tree.github]
    assert tree.dev.children == [tree.gitea]
    assert not editor.undo()
    assert tree.personal.children[-1] is tree.github


def test_undo_after_source_deleted_fails(editor, tree):
    editor.move(tree.gitea, tree.personal)
    editor.delete(tree.dev)

    assert not editor.undo()
    assert tree.personal.children[-1] is tree.gitea
    assert not editor.can_undo


def test_undo_after_moved_item_deleted_reattaches_it(editor, tree):
    editor.move(tree.gitea, tree.personal)
    assert editor.delete(tree.gitea)

    assert editor.undo()
    assert tree.dev.children == [tree.gitea]
    assert tree.dev.children[0] is tree.gitea
    assert tree.personal.children == [tree.news]
    assert not editor.can_undo


def test_load_replaces_tree_and_clears_undo(editor, tree):
    editor.move(tree.github, tree.personal)
    new_root = make_root()

    editor.load(new_root)

    assert editor.root is new_root
    assert not editor.can_undo
    assert editor.resolve(tree.github) is None
