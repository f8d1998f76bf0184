from types import SimpleNamespace

import pytest

from bookmark_editor import Bookmark, Folder, make_root

FIREFOX_EXPORT = """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<!-- This is an automatically generated file.
     It will be read and overwritten.
     DO NOT EDIT! -->
<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">
<TITLE>Bookmarks</TITLE>
<H1>Bookmarks</H1>
<DL><p>
    <DT><H3 ADD_DATE="1700000000" PERSONAL_TOOLBAR_FOLDER="true">Bookmarks bar</H3>
    <DL><p>
        <DT><A HREF="https://github.com" ADD_DATE="1700000001" ICON="data:image/png;base64,AAAA">GitHub</A>
        <DT><H3>Dev</H3>
        <DL><p>
            <DT><A HREF="https://gitea.io">Gitea</A>
            <DD>Self-hosted git service
            <DT><A HREF="https://docs.python.org/3/">  Python docs  </A>
        </DL><p>
    </DL><p>
    <DT><A HREF="https://news.ycombinator.com">Hacker News</A>
    <DT><A HREF="https://example.com/empty"></A>
    <DT><H3></H3>
    <DL><p>
    </DL><p>
</DL><p>
"""


@pytest.fixture
def sample_export_html():
    return FIREFOX_EXPORT


@pytest.fixture
def tree():
    """A small tree:

    Bookmarks
      Work
        GitHub
        Dev
          Gitea
      Personal
        News
    """
    root = make_root()
    github = Bookmark("GitHub", "https://github.com")
    gitea = Bookmark("Gitea", "https://gitea.io", icon="data:image/png;base64,BBBB")
    news = Bookmark("News", "https://news.example.com")
    dev = Folder("Dev", [gitea])
    work = Folder("Work", [github, dev])
    personal = Folder("Personal", [news])
    root.children.extend([work, personal])
    return SimpleNamespace(root=root, work=work, dev=dev, personal=personal,
                           github=github, gitea=gitea, news=news)
