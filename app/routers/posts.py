import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from app import dependencies as deps
from app.schemas.blog import HomeOverview, PostDetail, PostGroup, PostSummary
from app.services.markdown_renderer import MarkdownRenderer
from app.services.posts_service import PostsService
from app.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/posts", response_model=List[PostSummary])
def list_posts(
    group: Optional[str] = None,
    tag: Optional[str] = None,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get all posts metadata, newest first."""
    try:
        return [post.to_summary() for post in service.list_posts(group=group, tag=tag)]
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/{slug:path}", response_model=PostDetail)
def get_post(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
    renderer: MarkdownRenderer = Depends(deps.get_markdown_renderer),
):
    """Get a single post by slug, with its rendered HTML."""
    try:
        post = service.get_post(_split_slug(slug))
        if not post:
            raise HTTPException(status_code=404, detail="Post not found")
        return PostDetail(
            **post.model_dump(exclude={"urlPath"}),
            html=renderer.render(post.content),
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")


@router.get("/groups", response_model=List[str])
def list_groups(service: PostsService = Depends(deps.get_posts_service)):
    """Get the distinct post groups (top-level content directories)."""
    try:
        return service.list_groups()
    except Exception as e:
        logger.error(f"Unexpected error listing groups: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve groups")


@router.get("/groups/posts", response_model=List[PostGroup])
def list_grouped_posts(service: PostsService = Depends(deps.get_posts_service)):
    """Get posts bucketed by group for the blog index."""
    try:
        return service.group_posts()
    except Exception as e:
        logger.error(f"Unexpected error grouping posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/home", response_model=HomeOverview)
def home(
    service: PostsService = Depends(deps.get_posts_service),
    current_settings: Settings = Depends(deps.get_settings),
):
    """Recent, featured and per-category counts for the landing page."""
    try:
        return service.home_overview(current_settings.FEATURED_SEGMENTS)
    except Exception as e:
        logger.error(f"Unexpected error building home overview: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


def _split_slug(slug: str) -> List[str]:
    return [segment for segment in slug.split("/") if segment]
