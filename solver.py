"""Anagram index builder and query engine."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from backends import WordMap, create_backend
from models import BuildOptions, IndexBuildResult, QueryResult
from utils import canonical_key, insertion_sort, ordinal_compare, read_wordlist


def insert_word(index: WordMap, word: str) -> bool:
    """
    Add ``word`` to its anagram class in ``index``.

    Returns False when the exact same string is already in the class.
    """
    key = canonical_key(word.lower())
    anagrams = index.get(key)
    if anagrams is None:
        anagrams = []
    elif word in anagrams:
        return False

    anagrams.append(word)
    index.put(key, anagrams)
    return True


def populate_index(
    index: WordMap,
    words: Iterable[str | None],
    options: BuildOptions | None = None,
) -> tuple[int, int, int, bool]:
    """
    Insert every word up to the ``None`` end marker.

    Returns ``(total_words, accepted_words, duplicate_words, stopped_early)``.
    """
    opts = options or BuildOptions()
    total = accepted = duplicates = 0

    for word in words:
        if word is None:
            break
        total += 1
        if insert_word(index, word):
            accepted += 1
            continue

        duplicates += 1
        if opts.stop_on_duplicate:
            logging.info("Duplicate %r ended the build after %d words", word, total)
            return total, accepted, duplicates, True
        logging.debug("Skipped duplicate word %r", word)

    return total, accepted, duplicates, False


def build_index(
    words: Iterable[str | None],
    backend: str | WordMap = "avl",
    options: BuildOptions | None = None,
) -> WordMap:
    """Build an index mapping canonical key -> anagram class on the chosen backend."""
    index = create_backend(backend) if isinstance(backend, str) else backend
    total, accepted, duplicates, _ = populate_index(index, words, options)
    logging.info(
        "Indexed %d of %d words into %d keys (%d duplicates)",
        accepted,
        total,
        len(index),
        duplicates,
    )
    return index


def query_anagrams(index: WordMap, word: str) -> list[str] | None:
    """
    Return the anagrams of ``word`` in lexicographic order, excluding ``word``.

    ``None`` signals that there are no anagrams.
    """
    anagrams = index.get(canonical_key(word.lower()))
    if not anagrams or (len(anagrams) == 1 and anagrams[0] == word):
        return None

    others = [candidate for candidate in anagrams if candidate != word]
    if not others:
        return None
    return insertion_sort(others, ordinal_compare)


class AnagramFinder:
    """Build one anagram index from a wordlist file and answer lookups against it."""

    def __init__(self) -> None:
        self.index: WordMap | None = None
        self.wordlist_path: str = ""
        self.backend: str = ""

    def build_index(
        self,
        wordlist_path: str,
        backend: str,
        options: BuildOptions | None = None,
    ) -> IndexBuildResult:
        """Read ``wordlist_path`` and index it on ``backend``."""
        path = Path(wordlist_path)
        index = create_backend(backend)
        words = read_wordlist(path)
        total, accepted, duplicates, stopped_early = populate_index(index, words, options)

        self.index = index
        self.wordlist_path = str(path)
        self.backend = backend
        logging.info(
            "Built %s index from %s: %d words, %d keys",
            backend,
            path,
            accepted,
            len(index),
        )
        return IndexBuildResult(
            wordlist_path=str(path),
            backend=backend,
            total_words=total,
            accepted_words=accepted,
            duplicate_words=duplicates,
            unique_keys=len(index),
            stopped_early=stopped_early,
        )

    def lookup(self, word: str) -> QueryResult:
        if self.index is None:
            raise RuntimeError("No index built; call build_index first.")
        anagrams = query_anagrams(self.index, word)
        return QueryResult(
            word=word,
            key=canonical_key(word),
            anagrams=anagrams or [],
            found=anagrams is not None,
        )
