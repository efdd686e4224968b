"""
cf-cache-utils — Cache Tag Builder
"""

from collections.abc import Sequence


def build(tags: Sequence[str]) -> str:
    """
    Join classification tags into a Cache-Tag value.

    Input order is kept and nothing is sorted or deduplicated; an empty
    sequence yields "" (an untagged response).

    Raises:
        TypeError: If a single string is passed instead of a sequence of tags
    """
    if isinstance(tags, str):
        raise TypeError("build() expects a sequence of tags, not a single string")
    return ",".join(tags)
