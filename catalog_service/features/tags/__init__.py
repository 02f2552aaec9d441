"""Tags feature: typed secondary classification for tools."""

from __future__ import annotations

from .models import BadgeVariant, Tag, TagType
from .repository import TagRepository, get_tag_repository
from .schemas import TagListOptions, TagRead

__all__ = [
    "BadgeVariant",
    "Tag",
    "TagListOptions",
    "TagRead",
    "TagRepository",
    "TagType",
    "get_tag_repository",
]
