"""models.py — Shared data types for speedread."""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from errors import InvalidRate

WordSequence = tuple[str, ...]


@dataclass(frozen=True)
class Document:
    path: Path
    format: str      # "pdf" or "epub"


@dataclass
class DocumentMetadata:
    title: str
    author: str
    source_format: str = ""         # "epub", "pdf"


class PlaybackStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"
    COMPLETED = "completed"


def validate_wpm(wpm) -> int | float:
    """Return wpm unchanged if it is a usable rate, else raise InvalidRate."""
    if isinstance(wpm, bool) or not isinstance(wpm, (int, float)) or not wpm > 0:
        raise InvalidRate(f"Words per minute must be a positive number, got {wpm!r}")
    return wpm


@dataclass
class PlaybackSession:
    """
    One reading session over a word sequence.

    The caller owns the session and hands it to RSVPPlayer operations;
    the player keeps no state of its own between calls.
    """
    words: WordSequence
    wpm: int = 300
    index: int = 0
    status: PlaybackStatus = field(default=PlaybackStatus.IDLE, init=False)
    delay_ms: float = 0.0   # fixed when the session is started

    _task: asyncio.Task | None = field(default=None, init=False, repr=False, compare=False)
    _stopped: asyncio.Event | None = field(default=None, init=False, repr=False, compare=False)
    _resumed: asyncio.Event | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        self.words = tuple(self.words)
        validate_wpm(self.wpm)

    @property
    def total(self) -> int:
        return len(self.words)

    @property
    def remaining(self) -> int:
        return self.total - self.index

    @property
    def progress(self) -> float:
        """Fraction of words shown, 0.0 – 1.0."""
        return self.index / self.total if self.total else 1.0

    @property
    def estimated_seconds_left(self) -> float:
        return self.remaining * 60 / self.wpm

    @property
    def is_active(self) -> bool:
        return self.status in (PlaybackStatus.RUNNING, PlaybackStatus.PAUSED)

    def set_rate(self, wpm) -> None:
        """Record a new rate. A session already playing keeps its delay until the next start."""
        self.wpm = validate_wpm(wpm)
