import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field


class PostSummary(BaseModel):
    slug: List[str]
    title: str
    description: str = ""
    date: datetime.datetime
    tags: List[str] = Field(default_factory=list)
    group: Optional[str] = None

    @computed_field
    @property
    def urlPath(self) -> str:
        return "/blog/" + "/".join(self.slug)


class Post(PostSummary):
    content: str  # Markdown body without frontmatter

    def to_summary(self) -> PostSummary:
        return PostSummary(**self.model_dump(exclude={"content", "urlPath"}))


class PostDetail(Post):
    html: str


class PostGroup(BaseModel):
    name: str
    posts: List[PostSummary] = Field(default_factory=list)


class CategoryCount(BaseModel):
    name: str
    count: int


class HomeOverview(BaseModel):
    recent: List[PostSummary] = Field(default_factory=list)
    featured: List[PostSummary] = Field(default_factory=list)
    categories: List[CategoryCount] = Field(default_factory=list)
    totalPosts: int = 0
    totalCategories: int = 0
