#!/usr/bin/env python
"""
Bookmark Editor - load, reorganise and re-export browser bookmarks

Reads an HTML bookmark file exported from your browser (Netscape bookmark format),
lets you browse and edit the folder tree from the terminal, and writes a new HTML
file that any browser can import again.

Dependencies:
- beautifulsoup4
- python-dotenv
- tqdm

Setup:
1. Install dependencies: pip install beautifulsoup4 python-dotenv tqdm
2. Optionally create a .env file with BOOKMARKS_HTML_PARSER, BOOKMARKS_ENCODING
   or BOOKMARKS_OUTPUT

Usage:
python edit_bookmarks.py input_bookmarks.html [output_bookmarks.html]
"""

import argparse
import logging
import shlex
import sys
from pathlib import Path

from bs4 import BeautifulSoup

from bookmark_editor import (
    Bookmark,
    BookmarkEditor,
    BookmarkFileError,
    Folder,
    count_descendant_bookmarks,
    display_order,
    find_folder,
    find_parent,
    iter_nodes,
    load_bookmarks,
    resolve_path,
    save_bookmarks,
    search,
    tree_stats,
)
from bookmark_editor.config import load_settings
from bookmark_editor.query import contains

HELP = """Commands:
  ls                    list the current folder (folders first)
  cd NAME|..|/|PATH     change folder (PATH like /Bookmarks/Work)
  tree                  show the current folder as a tree
  mkdir NAME            create a folder here
  add URL [NAME]        add a bookmark here
  rename N NAME         rename item N
  seturl N URL          change the URL of bookmark N
  rm N                  delete item N
  mv N FOLDER           move item N into FOLDER (NAME, .., / or PATH)
  undo                  undo the last move
  find TEXT             search bookmarks below the current folder
  stats                 show structure statistics
  save [FILE]           write the bookmarks now
  quit                  finish editing and export
  abort                 exit without writing anything"""

# ---------- display ----------------------------------------------------------

def display_tree(node, prefix="", max_links=3):
    """Print tree structure of a bookmark folder."""
    children = display_order(node)
    folders = [c for c in children if isinstance(c, Folder)]
    links = [c for c in children if isinstance(c, Bookmark)]

    for i, folder in enumerate(folders):
        is_last = i == len(folders) - 1 and not links
        counts = count_descendant_bookmarks(folder)
        print(f"{prefix}{'└── ' if is_last else '├── '}📁 {folder.name} ({counts.bookmarks})")
        display_tree(folder, prefix + ('    ' if is_last else '│   '), max_links)

    if links:
        num_links = len(links)
        print(f"{prefix}└── 📑 {num_links} bookmark{'s' if num_links != 1 else ''}")
        shown = links[:max_links]
        for j, link in enumerate(shown):
            print(f"{prefix}    {'└── ' if j == len(shown) - 1 else '├── '}{link.name[:60]}")
        # Show if there are more we're not displaying
        if num_links > max_links:
            print(f"{prefix}        ... and {num_links - max_links} more")


def print_stats(root):
    stats = tree_stats(root)
    print("\n=== Bookmark Structure Statistics ===")
    print(f"Total folders: {stats['total_folders']}")
    print(f"Total bookmarks: {stats['total_bookmarks']}")

    if stats['total_folders'] > 0:
        print(f"Empty folders: {stats['empty_folders']}")
        print(f"Single-bookmark folders: {stats['single_bookmark_folders']} ({stats['single_bookmark_folders']/stats['total_folders']*100:.1f}% of folders)")

        sizes = stats["folder_sizes"]
        if sizes:
            print(f"Average bookmarks per folder: {sum(sizes)/len(sizes):.1f}")
            print(f"Folder size distribution: min={min(sizes)}, max={max(sizes)}")

        depths = stats["folder_depth"]
        if depths:
            print(f"Folder depth distribution: min={min(depths)}, max={max(depths)}, avg={sum(depths)/len(depths):.1f}")
    else:
        print("No folders - all bookmarks are at the top level.")


def print_listing(session):
    items = display_order(session.current)
    print(f"\n{resolve_path(session.editor.root, session.current)}")
    if not items:
        print("  (empty)")
    for i, item in enumerate(items, 1):
        if isinstance(item, Folder):
            counts = count_descendant_bookmarks(item)
            print(f"  {i:>3}. 📁 {item.name}  [{counts.folders} folders, {counts.bookmarks} bookmarks]")
        else:
            print(f"  {i:>3}. 🔖 {item.name}  <{item.url}>")


def debug_report(path):
    """Print basic statistics about the raw file, to diagnose parsing problems."""
    print("DEBUG MODE: Analyzing bookmark file structure...")
    try:
        with open(path, 'r', encoding=load_settings().encoding) as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error analyzing file structure: {e}")
        return

    soup = BeautifulSoup(content, 'html.parser')

    print(f"File size: {len(content)} bytes")
    print(f"Total <a> tags: {len(soup.find_all('a'))}")
    print(f"Total <dl> tags: {len(soup.find_all('dl'))}")
    print(f"Total <h3> tags: {len(soup.find_all('h3'))}")

    links = soup.find_all('a', limit=3)
    if links:
        print("\nSample links found:")
        for i, link in enumerate(links):
            print(f"Link {i+1}: {link.get('href')} - '{link.get_text(strip=True)}'")
    else:
        print("\nNo links found in file")

    if "NETSCAPE-Bookmark-file-1" in content:
        print("File appears to have Netscape bookmark format headers")
    else:
        print("File does not have standard Netscape bookmark format headers")

# ---------- editing ----------------------------------------------------------

class Session:
    """Interactive editing state: the editor plus the folder being browsed."""

    def __init__(self, editor, output_path):
        self.editor = editor
        self.current = editor.root
        self.output_path = output_path


def _item_at(session, token):
    items = display_order(session.current)
    try:
        index = int(token) - 1
    except ValueError:
        return None
    if 0 <= index < len(items):
        return items[index]
    return None


def _folder_at(session, token):
    root = session.editor.root
    if token == "/":
        return root
    if token == "..":
        return find_parent(root, session.current) or root
    if token.startswith("/"):
        return find_folder(root, token)
    for child in session.current.children:
        if isinstance(child, Folder) and child.name == token:
            return child
    item = _item_at(session, token)
    return item if isinstance(item, Folder) else None


def handle_command(session, line):
    """Run one command line. Returns False when the session should end."""
    try:
        args = shlex.split(line)
    except ValueError as e:
        print(f"Invalid input: {e}")
        return True
    if not args:
        return True

    command, rest = args[0].lower(), args[1:]
    editor = session.editor

    if command in ("quit", "exit", "q"):
        return False
    elif command == "help":
        print(HELP)
    elif command == "ls":
        print_listing(session)
    elif command == "tree":
        print(f"📁 {session.current.name}")
        display_tree(session.current)
    elif command == "cd" and len(rest) == 1:
        folder = _folder_at(session, rest[0])
        if folder is None:
            print(f"No such folder: {rest[0]}")
        else:
            session.current = folder
            print_listing(session)
    elif command == "mkdir" and rest:
        folder = editor.add_folder(session.current, " ".join(rest))
        print(f"Created folder '{folder.name}'" if folder else "Folder name is required")
    elif command == "add" and rest:
        url = rest[0]
        name = " ".join(rest[1:]) or url
        bookmark = editor.add_bookmark(session.current, name, url)
        print(f"Added bookmark '{bookmark.name}'" if bookmark else "Name and URL are required")
    elif command == "rename" and len(rest) >= 2:
        item = _item_at(session, rest[0])
        if item is not None and editor.rename(item, " ".join(rest[1:])):
            print(f"Renamed to '{item.name}'")
        else:
            print("Rename failed: check the item number and the new name")
    elif command == "seturl" and len(rest) == 2:
        item = _item_at(session, rest[0])
        if item is not None and editor.set_url(item, rest[1]):
            print(f"URL of '{item.name}' set to {item.url}")
        else:
            print("Only bookmarks have URLs, and the URL cannot be empty")
    elif command == "rm" and len(rest) == 1:
        item = _item_at(session, rest[0])
        if item is not None and editor.delete(item):
            print(f"Deleted '{item.name}'")
        else:
            print(f"No such item: {rest[0]}")
    elif command == "mv" and len(rest) == 2:
        item = _item_at(session, rest[0])
        target = _folder_at(session, rest[1])
        if item is None or target is None:
            print("Move failed: unknown item or folder")
        elif editor.move(item, target):
            print(f"Moved '{item.name}' to '{target.name}'")
        else:
            print(f"Cannot move '{item.name}' into '{target.name}'")
    elif command == "undo":
        print("Undid last move" if editor.undo() else "Nothing to undo")
    elif command == "find":
        results = search(session.current, " ".join(rest))
        print(f"Found {len(results)} bookmark{'s' if len(results) != 1 else ''}")
        for bookmark in results:
            print(f"  🔖 {bookmark.name}  <{bookmark.url}>")
    elif command == "stats":
        print_stats(editor.root)
    elif command == "save":
        path = rest[0] if rest else session.output_path
        try:
            export_netscape(editor.root, path)
        except BookmarkFileError as e:
            print(f"Error: {e}")
    else:
        print("Unknown command or wrong arguments. Type 'help' for the list of commands.")

    if not contains(editor.root, session.current):
        session.current = editor.root
    return True


def edit_tree_interactive(session):
    """Allow users to interactively edit the tree structure.

    Returns True to export the result, False to exit without writing.
    """
    print("\nType 'help' for the list of commands.")
    print_listing(session)
    while True:
        try:
            line = input(f"\n{session.current.name}> ")
        except EOFError:
            return True
        if line.strip().lower() == "abort":
            print("Operation cancelled.")
            return False
        if not handle_command(session, line):
            return True

# ---------- import / export --------------------------------------------------

def default_output_path(infile):
    path = Path(infile)
    return str(path.with_name(f"{path.stem}_edited{path.suffix or '.html'}"))


def export_netscape(root, out_path):
    print(f"Exporting bookmarks to {out_path}...")
    save_bookmarks(root, out_path, progress=True)


def verify_bookmarks(root, output_path):
    """Verify that every URL in the edited tree exists in the output file."""
    print("Verifying bookmark preservation...")

    expected_urls = set(node.url for node in iter_nodes(root) if isinstance(node, Bookmark))

    with open(output_path, encoding=load_settings().encoding) as f:
        output_soup = BeautifulSoup(f, "html.parser")
    output_urls = set(a.get("href") for a in output_soup.find_all("a"))

    missing_urls = expected_urls - output_urls

    if not missing_urls:
        print(f"✓ All {len(expected_urls)} bookmarks were preserved in the output file.")
        return True
    else:
        print(f"⚠ WARNING: {len(missing_urls)} bookmarks were not preserved in the output!")
        print(f"  Expected: {len(expected_urls)} URLs, Output: {len(output_urls)} URLs")
        if len(missing_urls) <= 5:
            for url in missing_urls:
                print(f"  Missing: {url}")
        return False

# ---------- CLI --------------------------------------------------------------

def main(argv=None):
    ap = argparse.ArgumentParser(description="Terminal bookmark editor")
    ap.add_argument("infile", help="exported HTML from browser")
    ap.add_argument("outfile", nargs="?", help="new HTML to import (default: <infile>_edited.html)")
    ap.add_argument("--auto", action="store_true", help="Skip interactive editing and re-export directly")
    ap.add_argument("--search", metavar="TEXT", help="Print bookmarks matching TEXT and exit")
    ap.add_argument("--verify", action="store_true", help="Check the written file contains every bookmark URL")
    ap.add_argument("--debug", action="store_true", help="Print detailed debugging information")
    args = ap.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
        debug_report(args.infile)

    print(f"Reading bookmarks from {args.infile}...")
    try:
        root = load_bookmarks(args.infile)
    except BookmarkFileError as e:
        print(f"Error loading bookmark file: {e}")
        return 1

    if not root.children:
        print("\n⚠️ No bookmarks were found in the file. It might be empty or in an unsupported format.")
        print("Try running with --debug flag for more information")
        return 1

    counts = count_descendant_bookmarks(root)
    print(f"Found {counts.bookmarks} bookmarks in {tree_stats(root)['total_folders']} folders")

    if args.search is not None:
        results = search(root, args.search)
        print(f"\n{len(results)} bookmark{'s' if len(results) != 1 else ''} matching '{args.search}':")
        for bookmark in results:
            print(f"  {bookmark.name}  <{bookmark.url}>")
        return 0

    print("\n=== Current Bookmark Organization ===")
    display_tree(root)
    print_stats(root)

    outfile = args.outfile or load_settings().output_path or default_output_path(args.infile)
    editor = BookmarkEditor(root)

    if not args.auto:
        if not edit_tree_interactive(Session(editor, outfile)):
            return 0

    try:
        export_netscape(editor.root, outfile)
    except BookmarkFileError as e:
        print(f"Error: {e}")
        return 1

    if args.verify and not verify_bookmarks(editor.root, outfile):
        return 1

    print(f"Complete! Bookmarks written to {outfile}")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nBye!")
        sys.exit(0)
