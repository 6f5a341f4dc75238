"""CLI entrypoint for the crossword layout generator."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Sequence

from crosslayout.core.constants import MIN_WORD_LENGTH
from crosslayout.engine.generator import GeneratorConfig, LayoutGenerator
from crosslayout.engine.layout_store import DEFAULT_STORE_DIR, LayoutStore
from crosslayout.io.solution import assign_solution_positions
from crosslayout.utils.logger import configure_logging, get_logger
from crosslayout.utils.pretty import print_layout_stats, print_ranking


LOGGER = get_logger("crosslayout.cli")


def parse_words_file(path: Path) -> List[str]:
    """Read words from a file, one entry per line. Blank lines and # comments are skipped.

    Entries in ``WORD:hint`` form keep only the word.
    """
    entries: List[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(line.split(":", 1)[0].strip())
    return entries


def normalize_words(raw_words: Sequence[str]) -> List[str]:
    """Upper-case, drop too-short or spaced entries and repeated words (first one wins)."""
    words: List[str] = []
    seen = set()
    for raw in raw_words:
        word = raw.strip().upper()
        if len(word) < MIN_WORD_LENGTH:
            if word:
                LOGGER.warning("Skipping %r: shorter than %d letters", raw, MIN_WORD_LENGTH)
            continue
        if any(ch.isspace() for ch in word):
            LOGGER.warning("Skipping %r: words may not contain spaces", raw)
            continue
        if word in seen:
            LOGGER.warning("Skipping repeated word %s", word)
            continue
        seen.add(word)
        words.append(word)
    return words


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate compact crossword layouts from a word list",
    )
    parser.add_argument("words", nargs="*", metavar="WORD", help="Words to place")
    parser.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="File with one WORD or WORD:hint entry per line (# comments and blank lines ignored)",
    )
    parser.add_argument("--attempts", type=int, default=100, help="Number of randomized attempts")
    parser.add_argument("--min-beam-width", type=int, default=50, help="Smallest beam width per attempt")
    parser.add_argument(
        "--beam-width-per-word",
        type=int,
        default=10,
        help="Beam width spread added per input word",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--top", type=int, default=20, help="How many ranked layouts to report")
    parser.add_argument("--solution", type=str, default="", help="Solution phrase to overlay on the best layout")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--save",
        action="store_true",
        help=f"Also store the run as a JSON document under {DEFAULT_STORE_DIR}",
    )
    parser.add_argument("--store-dir", type=Path, default=DEFAULT_STORE_DIR, help="Directory used by --save")
    parser.add_argument("--show", action="store_true", help="Print the best layout and ranking to stderr")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def build_payload(result, solution: str = "") -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "attempts": result.attempts,
        "unique_count": result.unique_count,
        "total_words": result.total_words,
        "seed": result.seed,
        "best_id": result.best.id if result.best else None,
        "layouts": [layout.to_dict() for layout in result.layouts],
    }
    if solution and result.best is not None:
        overlay = assign_solution_positions(result.best.table, solution)
        payload["solution"] = [
            {
                "char": entry.char,
                "new_word": entry.new_word,
                "position": list(entry.position) if entry.position else None,
                "is_given": entry.is_given,
                "number": entry.number,
            }
            for entry in overlay.chars
        ]
    return payload


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    raw_words: List[str] = list(args.words or [])
    if args.words_file:
        raw_words.extend(parse_words_file(args.words_file))
    words = normalize_words(raw_words)
    if not words:
        parser.error("provide at least one word of two or more letters (WORD ... or --words-file)")
    if args.attempts < 1:
        parser.error("--attempts must be at least 1")
    if args.top < 1:
        parser.error("--top must be at least 1")

    config = GeneratorConfig(
        attempts=args.attempts,
        min_beam_width=args.min_beam_width,
        beam_width_per_word=args.beam_width_per_word,
        seed=args.seed,
        top_results=args.top,
    )
    generator = LayoutGenerator(config)
    result = generator.generate(words)

    if args.save:
        LayoutStore(args.store_dir).save(result, config, words)

    if args.show and result.best is not None:
        print_layout_stats(result.best, stream=sys.stderr)
        print(file=sys.stderr)
        print_ranking(result, stream=sys.stderr)

    output_text = json.dumps(build_payload(result, args.solution), ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)


if __name__ == "__main__":  # pragma: no cover
    main()
