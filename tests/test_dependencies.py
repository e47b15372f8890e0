from pathlib import Path

from app.dependencies import (
    get_content_parser,
    get_default_post_date,
    get_markdown_renderer,
    get_posts_repo,
    get_posts_service,
    get_settings,
)
from app.repos.posts_repo import FilesystemPostsRepo
from app.services.content_parser import ContentParser
from app.services.markdown_renderer import MarkdownRenderer
from app.services.posts_service import PostsService
from app.settings import Settings, settings


def test_get_settings_returns_global_instance():
    assert get_settings() is settings


def test_get_posts_repo_uses_configured_root_and_extension(tmp_path):
    s = Settings(CONTENT_ROOT=tmp_path, CONTENT_EXTENSION=".markdown")

    repo = get_posts_repo(current_settings=s)

    assert isinstance(repo, FilesystemPostsRepo)
    assert repo.root == Path(tmp_path)
    assert repo.extension == ".markdown"


def test_default_post_date_is_stable_within_process():
    first = get_default_post_date()
    second = get_default_post_date()

    assert first is second
    assert first.tzinfo is not None


def test_get_posts_service_constructs_service():
    class FakeRepo:
        pass

    repo = FakeRepo()
    parser = get_content_parser()
    default_date = get_default_post_date()
    svc = get_posts_service(
        repo=repo,
        parser=parser,
        default_date=default_date,
        current_settings=Settings(SKIP_INVALID_POSTS=False),
    )

    assert isinstance(svc, PostsService)
    assert isinstance(svc.parser, ContentParser)
    assert svc.repo is repo
    assert svc.default_date is default_date
    assert svc.skip_invalid is False


def test_get_markdown_renderer_constructs_renderer():
    assert isinstance(get_markdown_renderer(), MarkdownRenderer)
