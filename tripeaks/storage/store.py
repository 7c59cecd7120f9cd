"""
Progress Store - Persists PlayerProgress as a JSON file.

The store:
- Keeps one record per data directory
- Stores on local disk (JSON)
- No database required
- Never blocks a game from starting: unreadable records load as defaults
"""

from __future__ import annotations
import json
import logging
import os
from pathlib import Path

from ..progression.progress import PlayerProgress

logger = logging.getLogger(__name__)

PROGRESS_FILENAME = "player_progress.json"
FORMAT_VERSION = 1


class ProgressStore:
    """
    File-based store for player progress.

    Usage:
        store = ProgressStore(data_dir="~/.tripeaks")

        progress = store.load()
        ...
        store.save(progress)
    """

    def __init__(self, data_dir: str | Path | None = None):
        if data_dir is None:
            data_dir = Path.home() / ".tripeaks"
        self.data_dir = Path(data_dir).expanduser()

    @property
    def path(self) -> Path:
        return self.data_dir / PROGRESS_FILENAME

    def load(self) -> PlayerProgress:
        """
        Load saved progress.

        Returns a zero-value PlayerProgress when there is no record
        or it cannot be read.
        """
        if not self.path.exists():
            return PlayerProgress()

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return PlayerProgress.from_dict(data.get("progress", data))
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Failed to load progress from %s: %s", self.path, e)
            return PlayerProgress()

    def save(self, progress: PlayerProgress) -> bool:
        """
        Save progress.

        Returns False on failure; the caller decides whether to tell the
        player. No retry.
        """
        record = {
            "version": FORMAT_VERSION,
            "progress": progress.to_dict(),
        }
        tmp_path = self.path.with_suffix(".tmp")
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(record, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to save progress to %s: %s", self.path, e)
            if tmp_path.exists():
                tmp_path.unlink()
            return False
        return True

    def clear(self):
        """
        Delete the saved record.
        """
        self.path.unlink(missing_ok=True)
