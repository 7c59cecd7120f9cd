"""Persistence for player progress."""

from .store import ProgressStore

__all__ = ["ProgressStore"]
