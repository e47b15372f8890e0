import textwrap
from pathlib import Path

import pytest


def write_posts(root: Path, files: dict[str, str]) -> Path:
    """
    Create a content tree under root. Keys are POSIX paths relative to root,
    values are file bodies (dedented, leading blank lines stripped).
    """
    for rel_path, body in files.items():
        target = root.joinpath(*rel_path.split("/"))
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return root


@pytest.fixture
def content_root(tmp_path) -> Path:
    root = tmp_path / "content" / "posts"
    root.mkdir(parents=True)
    return root


class FakeRepo:
    """
    Minimal in-memory repo stand-in used in service tests.
    Values of None simulate a listed file that fails to read.
    """

    def __init__(self, files: dict[str, str | None]):
        self.files = {tuple(k.split("/")): v for k, v in files.items()}
        self.reads = []

    def list_slugs(self):
        return [list(slug) for slug in sorted(self.files, key="/".join)]

    def read_post(self, slug):
        self.reads.append(tuple(slug))
        key = tuple(slug)
        if key not in self.files:
            return None
        body = self.files[key]
        if body is None:
            raise OSError(f"cannot read {'/'.join(slug)}")
        return textwrap.dedent(body).lstrip()


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(
        self,
        list_posts_return=None,
        get_post_return=None,
        groups_return=None,
        grouped_return=None,
        home_return=None,
    ):
        self._list_posts_return = list_posts_return or []
        self._get_post_return = get_post_return
        self._groups_return = groups_return or []
        self._grouped_return = grouped_return or []
        self._home_return = home_return
        self.calls = []

    def list_posts(self, group=None, tag=None):
        self.calls.append(("list_posts", group, tag))
        return self._list_posts_return

    def get_post(self, slug):
        self.calls.append(("get_post", tuple(slug)))
        return self._get_post_return

    def list_groups(self):
        return self._groups_return

    def group_posts(self):
        return self._grouped_return

    def home_overview(self, featured_segments=()):
        self.calls.append(("home_overview", tuple(featured_segments)))
        return self._home_return


class FakeRenderer:
    def __init__(self):
        self.rendered = []

    def render(self, content: str) -> str:
        self.rendered.append(content)
        return f"<p>{content.strip()}</p>"
