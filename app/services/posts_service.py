import datetime
import logging
from typing import Dict, Iterable, List, Optional, Sequence

from app.schemas.blog import (
    CategoryCount,
    HomeOverview,
    Post,
    PostGroup,
    PostSummary,
)
from app.services.content_parser import PostParseError

logger = logging.getLogger(__name__)

UNCATEGORIZED_GROUP = "uncategorized"
GENERAL_CATEGORY = "general"
HOME_RECENT_LIMIT = 6
HOME_FEATURED_LIMIT = 3
HOME_CATEGORY_LIMIT = 6


class PostsService:
    def __init__(
        self,
        repo,
        parser,
        default_date: Optional[datetime.datetime] = None,
        skip_invalid: bool = True,
    ):
        self.repo = repo
        self.parser = parser
        self.default_date = default_date or datetime.datetime.now(
            datetime.timezone.utc
        )
        self.skip_invalid = skip_invalid

    def list_posts(
        self, group: Optional[str] = None, tag: Optional[str] = None
    ) -> List[Post]:
        posts = []
        for slug in self.repo.list_slugs():
            try:
                post = self.get_post(slug)
            except PostParseError as e:
                if not self.skip_invalid:
                    raise
                logger.warning(f"Skipping post {'/'.join(slug)}: {e}")
                continue
            if post is None:
                logger.warning(
                    f"Listed post {'/'.join(slug)} could not be found, skipping"
                )
                continue
            posts.append(post)

        posts.sort(key=lambda p: p.date, reverse=True)

        if group is not None:
            posts = [p for p in posts if p.group == group]
        if tag is not None:
            posts = [p for p in posts if tag in p.tags]
        return posts

    def get_post(self, slug: Sequence[str]) -> Optional[Post]:
        slug = list(slug)
        try:
            text = self.repo.read_post(slug)
        except (OSError, UnicodeDecodeError) as e:
            raise PostParseError(f"Unreadable post file: {e}") from e
        if text is None:
            return None

        metadata, content = self.parser.parse(text)
        return build_post(slug, metadata, content, default_date=self.default_date)

    def list_groups(self) -> List[str]:
        return sorted({p.group for p in self.list_posts() if p.group})

    def group_posts(self) -> List[PostGroup]:
        grouped: Dict[str, List[PostSummary]] = {}
        for post in self.list_posts():
            key = post.group or UNCATEGORIZED_GROUP
            grouped.setdefault(key, []).append(post.to_summary())
        return [
            PostGroup(name=name, posts=grouped[name]) for name in sorted(grouped)
        ]

    def home_overview(self, featured_segments: Iterable[str] = ()) -> HomeOverview:
        posts = self.list_posts()
        featured_segments = set(featured_segments)

        featured = [p for p in posts if featured_segments.intersection(p.slug)]

        counts: Dict[str, int] = {}
        for post in posts:
            key = post.group or GENERAL_CATEGORY
            counts[key] = counts.get(key, 0) + 1

        return HomeOverview(
            recent=[p.to_summary() for p in posts[:HOME_RECENT_LIMIT]],
            featured=[p.to_summary() for p in featured[:HOME_FEATURED_LIMIT]],
            categories=[
                CategoryCount(name=name, count=count)
                for name, count in list(counts.items())[:HOME_CATEGORY_LIMIT]
            ],
            totalPosts=len(posts),
            totalCategories=len(counts),
        )


def build_post(
    slug: List[str],
    metadata: dict,
    content: str,
    *,
    default_date: datetime.datetime,
) -> Post:
    """Normalize loosely typed front matter into a Post."""
    if not slug:
        raise PostParseError("Post slug must not be empty")

    try:
        date = _coerce_date(metadata.get("date"), default_date)
    except ValueError as e:
        raise PostParseError(f"Invalid date in post {'/'.join(slug)}: {e}") from e

    return Post(
        slug=slug,
        title=_derive_title(metadata, slug),
        description=str(metadata.get("description") or ""),
        date=date,
        tags=_normalize_tags(metadata.get("tags")),
        content=content,
        group=_derive_group(slug),
    )


def _derive_title(metadata: dict, slug: List[str]) -> str:
    if metadata.get("title"):
        return str(metadata["title"])
    return slug[-1]


def _derive_group(slug: List[str]) -> Optional[str]:
    return slug[0] if len(slug) > 1 else None


def _normalize_tags(value) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple, set)):
        items = [item for item in value if item is not None]
    else:
        items = [value]
    tags = (str(item).strip() for item in items)
    return list(dict.fromkeys(tag for tag in tags if tag))


def _coerce_date(value, default: datetime.datetime) -> datetime.datetime:
    if value is None or value == "":
        return default
    if isinstance(value, datetime.datetime):
        result = value
    elif isinstance(value, datetime.date):
        result = datetime.datetime.combine(value, datetime.time.min)
    elif isinstance(value, str):
        result = datetime.datetime.fromisoformat(value.strip())
    else:
        raise ValueError(f"unsupported date value {value!r}")

    if result.tzinfo is None:
        result = result.replace(tzinfo=datetime.timezone.utc)
    return result
