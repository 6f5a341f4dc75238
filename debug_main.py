"""Convenience entrypoint with predefined generator settings for debugging.

Usage in a Python console (Jupyter-style)::

    import debug_main
    state = debug_main.prepare_state(words=["KOT", "TOR", "ROK"])
    debug_main.step_search(state)          # one beam step
    debug_main.step_search(state, steps=None)  # run the beam to the end
    debug_main.step_complete(state)
    layout = debug_main.step_finish(state)

Call :func:`run_debug` for a one-liner, or execute the functions above one by
one to inspect intermediate state.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, Optional

from crosslayout.core.constants import Orientation
from crosslayout.core.models import FinishedLayout
from crosslayout.engine.canonical import signature
from crosslayout.engine.generator import GeneratorConfig, LayoutGenerator, finish_layout, prepare_words
from crosslayout.engine.search import BeamSearch, SearchConfig, complete_layout
from crosslayout.engine.validator import LayoutValidator
from crosslayout.utils.logger import configure_logging
from crosslayout.utils.pretty import format_table, print_layout_stats, print_ranking

DEFAULT_DEBUG_ARGS: Dict[str, Any] = {
    "words": ["PYTHON", "TYPING", "HASH", "TUPLE", "STRING", "LAMBDA", "YIELD", "ASYNC"],
    "seed": 7,
    "beam_width": 40,
    "orientation": None,
    "attempts": 10,
}

LOGGER = logging.getLogger(__name__)


def prepare_state(**overrides: Any) -> Dict[str, Any]:
    """Return a mutable state dictionary used by the step helpers."""

    args = {**DEFAULT_DEBUG_ARGS, **overrides}
    configure_logging(logging.DEBUG if args.get("verbose") else logging.INFO)
    words = prepare_words([w.strip().upper() for w in args["words"]])
    rng = random.Random(args["seed"])
    orientation = args.get("orientation")
    if isinstance(orientation, str):
        orientation = Orientation(orientation.upper())
    order = list(words)
    rng.shuffle(order)
    search = BeamSearch(
        order,
        beam_width=int(args["beam_width"]),
        orientation=orientation,
        rng=rng,
        config=SearchConfig(),
    )
    return {
        "args": args,
        "words": words,
        "rng": rng,
        "search": search,
        "state": None,
        "layout": None,
    }


def step_search(state: Dict[str, Any], steps: Optional[int] = 1):
    """Advance the beam ``steps`` times (``None`` runs it to the end)."""
    search: BeamSearch = state["search"]
    taken = 0
    while search.is_running and (steps is None or taken < steps):
        search.step()
        taken += 1
    leader = search.leader
    LOGGER.info(
        "Beam %s after %d steps: leader %d/%d placed, score %.2f",
        search.phase.value,
        search.steps_taken,
        leader.placed_count,
        len(state["words"]),
        leader.score,
    )
    state["state"] = search.best()
    print(format_table(state["state"].grid.to_table()))
    return state["state"]


def step_complete(state: Dict[str, Any]):
    if state["state"] is None:
        step_search(state, steps=None)
    state["state"] = complete_layout(state["state"])
    return state["state"]


def step_finish(state: Dict[str, Any]) -> FinishedLayout:
    if state["state"] is None:
        step_complete(state)
    layout = finish_layout(1, state["state"], len(state["words"]), state["search"].beam_width)
    validation = LayoutValidator().validate(layout.placements)
    if not validation.ok:
        LOGGER.warning("Layout failed validation: %s", validation.messages)
    LOGGER.info("Signature has %d distinct encodings", len(signature(layout.table)))
    state["layout"] = layout
    print_layout_stats(layout)
    return layout


def run_debug(**overrides: Any):
    """Run the full orchestrator with the debug defaults and print the ranking."""

    args = {**DEFAULT_DEBUG_ARGS, **overrides}
    configure_logging()
    words = [w.strip().upper() for w in args["words"]]
    config = GeneratorConfig(attempts=int(args["attempts"]), seed=args["seed"])
    result = LayoutGenerator(config).generate(words)
    print_ranking(result)
    if result.best is not None:
        print()
        print_layout_stats(result.best)
    return result


def main() -> None:  # pragma: no cover - manual helper
    result = run_debug()
    print(f"Seed: {result.seed}")
    print(f"Unique layouts: {result.unique_count} from {result.attempts} attempts")


if __name__ == "__main__":
    main()
