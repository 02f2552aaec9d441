"""Stacks feature: technology stack groupings."""

from __future__ import annotations

from .models import Stack
from .repository import StackRepository, get_stack_repository
from .schemas import StackListOptions, StackRead

__all__ = [
    "Stack",
    "StackListOptions",
    "StackRead",
    "StackRepository",
    "get_stack_repository",
]
