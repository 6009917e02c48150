"""Data models for anagram index builds and query results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(slots=True)
class BuildOptions:
    """Options controlling how the index builder treats the word source."""

    # Abort the remaining build at the first exact duplicate instead of skipping it.
    stop_on_duplicate: bool = False


@dataclass(slots=True)
class IndexBuildResult:
    """Summary returned after building an index."""

    wordlist_path: str
    backend: str
    total_words: int
    accepted_words: int
    duplicate_words: int
    unique_keys: int
    stopped_early: bool = False


@dataclass(slots=True)
class QueryResult:
    """Anagrams of a single query word."""

    word: str
    key: str
    anagrams: list[str] = field(default_factory=list)
    found: bool = False
    generated_at_utc: str = field(default_factory=_utc_now)
