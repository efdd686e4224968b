"""
cf-cache-utils — Cloudflare cache control for content sites

Decides when responses may be cached at the edge, tags them for selective
invalidation, and purges Cloudflare when content changes.
"""

__version__ = "1.0.0"

from .events import EventBus
from .plugin import CacheUtils

__all__ = ["CacheUtils", "EventBus"]
