"""Utility helpers for key derivation, sorting, word lists, config, and exports."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, TypeVar

from models import QueryResult

T = TypeVar("T")
Comparator = Callable[[Any, Any], int]


def _choose_app_dir() -> Path:
    """
    Pick a writable app directory.

    ANAGRAM_FINDER_HOME wins when set; otherwise the user home is preferred,
    with a local workspace fallback when blocked.
    """
    override = os.environ.get("ANAGRAM_FINDER_HOME")
    preferred = Path(override) if override else Path.home() / ".anagram_finder"
    try:
        preferred.mkdir(parents=True, exist_ok=True)
        return preferred
    except OSError:
        fallback = Path(".anagram_finder")
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


APP_DIR = _choose_app_dir()
CONFIG_PATH = APP_DIR / "config.json"
LOG_PATH = APP_DIR / "app.log"


def ensure_app_dirs() -> None:
    """Create the app directory if it does not already exist."""
    APP_DIR.mkdir(parents=True, exist_ok=True)


def setup_logging() -> None:
    """Configure file logging once per app run."""
    ensure_app_dirs()
    logging.basicConfig(
        filename=str(LOG_PATH),
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def load_config() -> dict[str, Any]:
    """Load config from the user home config file."""
    ensure_app_dirs()
    if not CONFIG_PATH.exists():
        return {}
    try:
        return json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        logging.exception("Failed to load config from %s", CONFIG_PATH)
        return {}


def save_config(config: dict[str, Any]) -> None:
    """Persist config to disk."""
    ensure_app_dirs()
    try:
        CONFIG_PATH.write_text(json.dumps(config, indent=2), encoding="utf-8")
    except Exception:
        logging.exception("Failed to save config to %s", CONFIG_PATH)


def ordinal_compare(left: Any, right: Any) -> int:
    """Three-way comparison on the natural (code point) ordering."""
    return (left > right) - (left < right)


def insertion_sort(items: list[T], compare: Comparator | None = None) -> list[T]:
    """
    Sort ``items`` in place with insertion sort and return the same list.

    ``compare(a, b)`` returns a negative, zero, or positive number. Elements
    only move past strictly greater neighbours, so equal elements keep their
    input order.
    """
    cmp = compare or ordinal_compare
    for i in range(1, len(items)):
        current = items[i]
        k = i - 1
        while k >= 0 and cmp(items[k], current) > 0:
            items[k + 1] = items[k]
            k -= 1
        items[k + 1] = current
    return items


def canonical_key(word: str) -> str:
    """Case-folded, character-sorted key shared by every anagram of ``word``."""
    return "".join(insertion_sort(list(word.lower())))


def read_wordlist(wordlist_path: str | Path) -> list[str | None]:
    """
    Read a word list, one word per line.

    Blank lines are skipped and the returned sequence ends with a ``None``
    end marker.
    """
    path = Path(wordlist_path)
    if not path.exists():
        raise FileNotFoundError(f"Wordlist file not found: {wordlist_path}")

    words: list[str | None] = []
    with path.open("rb") as handle:
        for raw_line in handle:
            candidate = raw_line.decode("utf-8", errors="ignore").strip()
            if candidate:
                words.append(candidate)
    words.append(None)
    return words


def export_result(json_path: Path, result: QueryResult, wordlist_path: str, backend: str) -> None:
    """Export a query result to JSON."""
    payload = {
        "generated_at_utc": result.generated_at_utc,
        "wordlist_path": wordlist_path,
        "backend": backend,
        "word": result.word,
        "key": result.key,
        "found": result.found,
        "anagrams": result.anagrams,
    }
    json_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
