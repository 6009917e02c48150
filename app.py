"""Command-line entry point: print the anagrams of a word found in a dictionary file."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from backends import BACKENDS
from solver import AnagramFinder
from utils import export_result, load_config, save_config, setup_logging

logger = logging.getLogger(__name__)


class UsageError(Exception):
    """Raised instead of exiting when the command line cannot be parsed."""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        raise UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="anagram-finder",
        description="Find the anagrams of a word in a dictionary file.",
        usage="%(prog)s <word> <dictionary file> [bst|avl|hash] [--json PATH]",
    )
    parser.add_argument("word", help="The word to find anagrams for.")
    parser.add_argument("dictionary", help="Text file with one word per line.")
    parser.add_argument(
        "backend",
        nargs="?",
        help="Map backend used for the index (defaults to 'default_backend' from config).",
    )
    parser.add_argument("--json", dest="json_path", help="Also export the result to this JSON file.")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as exc:
        print(f"Usage: {parser.format_usage().removeprefix('usage: ').strip()}")
        logger.info("Rejected command line: %s", exc)
        return 1
    setup_logging()
    config = load_config()

    dictionary = Path(args.dictionary)
    if not dictionary.exists():
        print(f"Error: Cannot open file '{args.dictionary}' for input.")
        return 1

    backend = args.backend or config.get("default_backend")
    if not backend:
        print("Error: No data structure selected.")
        return 1
    if backend not in BACKENDS:
        print(f"Error: Invalid data structure '{backend}' received.")
        return 1

    finder = AnagramFinder()
    try:
        finder.build_index(str(dictionary), backend)
    except OSError:
        logger.exception("Failed reading %s", dictionary)
        print(f"Error: An I/O error occurred reading '{args.dictionary}'.")
        return 1

    config["last_wordlist_path"] = str(dictionary.resolve())
    save_config(config)

    result = finder.lookup(args.word)
    if result.found:
        for anagram in result.anagrams:
            print(anagram)
    else:
        print("No anagrams found.")

    if args.json_path:
        try:
            export_result(Path(args.json_path), result, finder.wordlist_path, backend)
        except OSError as exc:
            logger.exception("Export failed")
            print(f"Error: Could not save result: {exc}")
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
