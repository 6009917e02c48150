from pathlib import Path

import pytest

from backends import BACKENDS, HashMap
from models import BuildOptions
from solver import AnagramFinder, build_index, insert_word, query_anagrams
from utils import canonical_key, read_wordlist


def sample_wordlist_path() -> str:
    return str(Path(__file__).resolve().parent.parent / "sample_data" / "wordlist_small.txt")


def test_build_index_groups_anagrams() -> None:
    finder = AnagramFinder()
    result = finder.build_index(sample_wordlist_path(), "avl")

    assert result.total_words == 23
    assert result.accepted_words == 22
    assert result.duplicate_words == 1
    assert result.unique_keys == 6
    assert not result.stopped_early
    assert finder.index.get(canonical_key("listen")) == ["listen", "silent", "enlist", "tinsel"]


def test_query_excludes_word_and_sorts() -> None:
    index = build_index(["rat", "tar", "art", None])
    assert query_anagrams(index, "rat") == ["art", "tar"]


def test_duplicate_is_skipped_and_build_continues() -> None:
    index = build_index(["tea", "eat", "ate", "tea", "apple", None], "hash")
    assert index.get("aet") == ["tea", "eat", "ate"]
    assert index.get("aelpp") == ["apple"]
    assert query_anagrams(index, "tea") == ["ate", "eat"]


def test_stop_on_duplicate_ends_build_early() -> None:
    finder = AnagramFinder()
    result = finder.build_index(sample_wordlist_path(), "bst", BuildOptions(stop_on_duplicate=True))

    assert result.stopped_early
    assert result.total_words == 16
    assert result.accepted_words == 15
    assert not finder.lookup("apple").found
    assert finder.lookup("tea").anagrams == ["ate", "eat"]


def test_insert_word_reports_exact_duplicates_only() -> None:
    index = HashMap()
    assert insert_word(index, "rat")
    assert insert_word(index, "Rat")
    assert not insert_word(index, "rat")
    assert index.get("art") == ["rat", "Rat"]


def test_end_marker_stops_iteration() -> None:
    index = build_index(["rat", None, "tar"])
    assert index.get("art") == ["rat"]


def test_no_anagrams_signal() -> None:
    index = build_index(["apple", "rat", "tar", None])
    assert query_anagrams(index, "apple") is None
    assert query_anagrams(index, "zzz") is None


def test_empty_class_is_no_anagrams() -> None:
    index = HashMap()
    index.put("art", [])
    assert query_anagrams(index, "rat") is None


def test_class_emptied_by_exclusion_is_no_anagrams() -> None:
    index = HashMap()
    index.put("art", ["rat", "rat"])
    assert query_anagrams(index, "rat") is None


def test_exclusion_removes_every_matching_entry() -> None:
    index = HashMap()
    index.put("art", ["rat", "tar", "rat"])
    assert query_anagrams(index, "rat") == ["tar"]


def test_query_word_not_in_list_gets_whole_class() -> None:
    index = build_index(["tea", "eat", "ate", None])
    assert query_anagrams(index, "TEA") == ["ate", "eat", "tea"]


def test_case_is_folded_for_keys_and_preserved_in_output() -> None:
    finder = AnagramFinder()
    finder.build_index(sample_wordlist_path(), "avl")

    assert finder.lookup("Rat").anagrams == ["art", "rat", "tar"]
    assert finder.lookup("rat").anagrams == ["Rat", "art", "tar"]
    assert finder.lookup("evil").anagrams == ["Veil", "live", "vile"]


def test_backends_give_identical_results() -> None:
    words = read_wordlist(sample_wordlist_path())
    indexes = {name: build_index(words, name) for name in BACKENDS}
    queries = [w for w in words if w is not None] + ["xyz", "TEA", ""]

    for word in queries:
        answers = {name: query_anagrams(index, word) for name, index in indexes.items()}
        assert len({repr(answer) for answer in answers.values()}) == 1, (word, answers)


def test_lookup_before_build_raises() -> None:
    with pytest.raises(RuntimeError):
        AnagramFinder().lookup("rat")


def test_lookup_reports_key_and_found_flag() -> None:
    finder = AnagramFinder()
    finder.build_index(sample_wordlist_path(), "hash")

    result = finder.lookup("apple")
    assert result.key == "aelpp"
    assert not result.found
    assert result.anagrams == []


def test_missing_wordlist_raises() -> None:
    with pytest.raises(FileNotFoundError):
        AnagramFinder().build_index("does/not/exist.txt", "avl")


class BrokenMap:
    """Map backend whose storage fails on every access."""

    def get(self, key: str):
        raise MemoryError("backend exhausted")

    def put(self, key: str, value) -> None:
        raise MemoryError("backend exhausted")

    def items(self):
        return iter(())

    def __iter__(self):
        return iter(())

    def __len__(self) -> int:
        return 0


class WriteOnlyFailingMap(HashMap):
    def put(self, key: str, value) -> None:
        raise KeyError(key)


def test_backend_failure_during_build_propagates() -> None:
    with pytest.raises(MemoryError, match="backend exhausted"):
        build_index(["rat", "tar", None], BrokenMap())
    with pytest.raises(KeyError):
        build_index(["rat", None], WriteOnlyFailingMap())


def test_backend_failure_during_query_propagates() -> None:
    with pytest.raises(MemoryError, match="backend exhausted"):
        query_anagrams(BrokenMap(), "rat")


def test_padded_lines_are_indexed_by_their_stripped_word(tmp_path) -> None:
    path = tmp_path / "padded.txt"
    path.write_text(" rat \n\n\ttar\n   \nart  \n", encoding="utf-8")

    finder = AnagramFinder()
    result = finder.build_index(str(path), "hash")

    assert result.total_words == 3
    assert finder.index.get("art") == ["rat", "tar", "art"]
    assert finder.index.get("") is None
    assert finder.lookup("rat").anagrams == ["art", "tar"]
