"""
cf-cache-utils — Comment Privacy Helpers

Public pages are cached for a year, so nothing personal may be rendered
into them server-side. Commenter details are kept client-side (cookies read
by a script) and the server always renders an anonymous commenter.
"""

from .content import Comment, ContentRepository

HELD_STATES = ("0", "hold")


def anonymous_commenter() -> dict[str, str]:
    """Commenter fields as rendered server-side: always empty."""
    return {
        "comment_author": "",
        "comment_author_email": "",
        "comment_author_url": "",
    }


def moderation_redirect(location: str, comment: Comment, content: ContentRepository) -> str:
    """
    Redirect target after a comment is posted.

    A comment held for moderation is not visible yet, and its per-comment
    URL would only produce an uncacheable variant; send the author back to
    the post itself instead.
    """
    if comment.approved in HELD_STATES:
        return content.permalink(comment.post_id)
    return location
