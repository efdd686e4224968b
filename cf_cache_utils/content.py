"""
cf-cache-utils — Content Repository

Read-only view of the host platform's content that invalidation rules need:
post status, permalinks, comments and the site root URL.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

PUBLISH = "publish"


@dataclass(frozen=True)
class Comment:
    """A comment as the host platform reports it."""

    comment_id: int
    post_id: int
    # "1" approved, "0" or "hold" pending, "spam", "trash"
    approved: str = "0"


class ContentRepository(ABC):
    """Lookups the host platform must provide."""

    @abstractmethod
    def post_status(self, post_id: int) -> str | None:
        """Current status of a post ("publish", "draft", ...), None if unknown."""
        pass

    @abstractmethod
    def permalink(self, post_id: int) -> str:
        """Canonical public URL of a post."""
        pass

    @abstractmethod
    def home_url(self) -> str:
        """Site root URL."""
        pass

    @abstractmethod
    def get_comment(self, comment_id: int) -> Comment | None:
        """Comment by id, None if it no longer exists."""
        pass


class InMemoryContentRepository(ContentRepository):
    """Dictionary-backed repository for tests and local tooling."""

    def __init__(self, home: str = "https://example.com/"):
        self.home = home
        self.posts: dict[int, tuple[str, str]] = {}
        self.comments: dict[int, Comment] = {}

    def add_post(self, post_id: int, status: str = PUBLISH, permalink: str | None = None) -> None:
        url = permalink or f"{self.home.rstrip('/')}/?p={post_id}"
        self.posts[post_id] = (status, url)

    def add_comment(self, comment: Comment) -> None:
        self.comments[comment.comment_id] = comment

    def post_status(self, post_id: int) -> str | None:
        post = self.posts.get(post_id)
        return post[0] if post else None

    def permalink(self, post_id: int) -> str:
        post = self.posts.get(post_id)
        return post[1] if post else ""

    def home_url(self) -> str:
        return self.home

    def get_comment(self, comment_id: int) -> Comment | None:
        return self.comments.get(comment_id)
