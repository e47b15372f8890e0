import datetime
from functools import lru_cache

from fastapi import Depends

from app.repos.posts_repo import FilesystemPostsRepo
from app.services.content_parser import ContentParser
from app.services.markdown_renderer import MarkdownRenderer
from app.services.posts_service import PostsService
from app.settings import Settings, settings


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


@lru_cache
def get_default_post_date() -> datetime.datetime:
    """Fallback date for undated posts, fixed for the lifetime of the process."""
    return datetime.datetime.now(datetime.timezone.utc)


def get_posts_repo(current_settings: Settings = Depends(get_settings)):
    return FilesystemPostsRepo(
        current_settings.content_root, extension=current_settings.CONTENT_EXTENSION
    )


def get_content_parser():
    return ContentParser()


def get_markdown_renderer():
    return MarkdownRenderer()


def get_posts_service(
    repo=Depends(get_posts_repo),
    parser=Depends(get_content_parser),
    default_date=Depends(get_default_post_date),
    current_settings: Settings = Depends(get_settings),
):
    return PostsService(
        repo=repo,
        parser=parser,
        default_date=default_date,
        skip_invalid=current_settings.SKIP_INVALID_POSTS,
    )
