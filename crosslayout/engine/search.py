"""Beam search over partial layouts plus the greedy completion pass."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from ..core.constants import (
    CANDIDATES_PER_WORD,
    COMPLETION_ROUNDS,
    MAX_STAGNATION,
    SHARED_LETTER_WEIGHT,
    WORD_SHORTLIST,
    Orientation,
)
from ..core.exceptions import ConfigError, EmptyWordListError
from ..core.models import BeamState, Candidate, Placement
from ..utils.logger import get_logger
from .candidates import find_candidates
from .grid import LayoutGrid
from .scoring import beam_score


LOGGER = get_logger(__name__)


@dataclass
class SearchConfig:
    """Branching limits for one beam search."""

    word_shortlist: int = WORD_SHORTLIST
    candidates_per_word: int = CANDIDATES_PER_WORD
    max_stagnation: int = MAX_STAGNATION
    completion_rounds: int = COMPLETION_ROUNDS

    def validate(self) -> None:
        for name in ("word_shortlist", "candidates_per_word", "max_stagnation"):
            if getattr(self, name) < 1:
                raise ConfigError(f"{name} must be at least 1")
        if self.completion_rounds < 0:
            raise ConfigError("completion_rounds must not be negative")


class SearchPhase(str, Enum):
    SEEDING = "SEEDING"
    EXPANDING = "EXPANDING"
    STALLED = "STALLED"
    EXHAUSTED = "EXHAUSTED"


def shared_letter_count(word: str, letters: Iterable[str]) -> int:
    pool = letters if isinstance(letters, (set, frozenset)) else set(letters)
    return sum(1 for letter in word if letter in pool)


def without(words: Sequence[str], word: str) -> List[str]:
    return [other for other in words if other != word]


def child_state(state: BeamState, word: str, candidate: Candidate) -> BeamState:
    """Apply one candidate to a fresh clone of the parent's grid."""
    grid = state.grid.clone()
    placement = candidate.to_placement(word)
    grid.place(placement)
    placements = state.placements + (placement,)
    intersections = state.intersections + candidate.intersections
    return BeamState(
        grid=grid,
        placements=placements,
        remaining=tuple(without(state.remaining, word)),
        score=beam_score(grid, len(placements), intersections),
        intersections=intersections,
    )


class BeamSearch:
    """Resumable beam search over partial layouts.

    The first word of ``words`` seeds the layout at the origin; the rest
    are shuffled with ``rng``. Each call to :meth:`step` expands every
    state in the beam and keeps the ``beam_width`` best distinct children.
    """

    def __init__(
        self,
        words: Sequence[str],
        beam_width: int,
        orientation: Optional[Orientation] = None,
        rng: Optional[random.Random] = None,
        config: Optional[SearchConfig] = None,
    ) -> None:
        if not words:
            raise EmptyWordListError("Beam search needs at least one word")
        if beam_width < 1:
            raise ConfigError("beam_width must be at least 1")
        self.words = list(words)
        self.beam_width = beam_width
        self.rng = rng or random.Random()
        self.orientation = orientation or (
            Orientation.ACROSS if self.rng.random() > 0.5 else Orientation.DOWN
        )
        self.config = config or SearchConfig()
        self.config.validate()
        self.phase = SearchPhase.SEEDING
        self.beam: List[BeamState] = []
        self.stagnation = 0
        self.steps_taken = 0

    # ------------------------------------------------------------------
    # Driving
    # ------------------------------------------------------------------
    @property
    def is_running(self) -> bool:
        return self.phase in (SearchPhase.SEEDING, SearchPhase.EXPANDING)

    @property
    def leader(self) -> BeamState:
        return self.beam[0]

    def best(self) -> BeamState:
        if not self.beam:
            self._seed()
        return max(self.beam, key=lambda state: state.score)

    def step(self) -> bool:
        """Advance one step; return ``True`` while the search can continue."""
        if self.phase is SearchPhase.SEEDING:
            self._seed()
        elif self.phase is SearchPhase.EXPANDING:
            self._expand()
        return self.is_running

    def steps(self) -> Iterator[BeamState]:
        """Yield the leading state after seeding and after every step."""
        while self.is_running:
            self.step()
            yield self.leader

    def run(self) -> BeamState:
        for _ in self.steps():
            pass
        return self.best()

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------
    def _seed(self) -> None:
        seed_word = self.words[0]
        grid = LayoutGrid()
        placement = Placement(seed_word, 0, 0, self.orientation)
        grid.place(placement)
        remaining = self.words[1:]
        self.rng.shuffle(remaining)
        self.beam = [BeamState(grid=grid, placements=(placement,), remaining=tuple(remaining))]
        self.phase = SearchPhase.EXPANDING if remaining else SearchPhase.EXHAUSTED
        LOGGER.debug(
            "Seeded beam with %s (%s), %d words remaining",
            seed_word,
            self.orientation.value,
            len(remaining),
        )

    def _expand(self) -> None:
        previous_best = self.leader.placed_count
        children: List[BeamState] = []
        for state in self.beam:
            children.extend(self._children(state))
        self.steps_taken += 1

        if not children:
            self.phase = SearchPhase.STALLED
            LOGGER.debug("Beam stalled after %d steps: no children", self.steps_taken)
            return

        children.sort(key=lambda state: state.score, reverse=True)
        unique: Dict[str, BeamState] = {}
        for child in children:
            key = child.key
            existing = unique.get(key)
            if existing is None or existing.score < child.score:
                unique[key] = child
        self.beam = sorted(unique.values(), key=lambda state: state.score, reverse=True)[
            : self.beam_width
        ]

        if self.leader.placed_count == previous_best:
            self.stagnation += 1
        else:
            self.stagnation = 0
        LOGGER.debug(
            "Step %d: %d children, %d unique, leader %d placed (score %.2f)",
            self.steps_taken,
            len(children),
            len(unique),
            self.leader.placed_count,
            self.leader.score,
        )

        if not self.leader.remaining:
            self.phase = SearchPhase.EXHAUSTED
        elif self.stagnation >= self.config.max_stagnation:
            self.phase = SearchPhase.STALLED

    def _children(self, state: BeamState) -> List[BeamState]:
        letters = state.grid.letters()
        ranked = sorted(
            state.remaining,
            key=lambda word: shared_letter_count(word, letters) * SHARED_LETTER_WEIGHT + len(word),
            reverse=True,
        )
        children: List[BeamState] = []
        for word in ranked[: self.config.word_shortlist]:
            candidates = find_candidates(state.grid, word, without(state.remaining, word))
            for candidate in candidates[: self.config.candidates_per_word]:
                children.append(child_state(state, word, candidate))
        return children


def complete_layout(state: BeamState, rounds: int = COMPLETION_ROUNDS) -> BeamState:
    """Greedily place leftover words at their best candidate.

    Words are tried in order of shared letters with the grid. A round
    that places nothing ends the pass early.
    """

    current = state
    for round_no in range(1, rounds + 1):
        if not current.remaining:
            break
        letters = current.grid.letters()
        ordered = sorted(
            current.remaining,
            key=lambda word: shared_letter_count(word, letters),
            reverse=True,
        )
        placed = 0
        for word in ordered:
            candidates = find_candidates(current.grid, word, without(current.remaining, word), limit=1)
            if candidates:
                current = child_state(current, word, candidates[0])
                placed += 1
        LOGGER.debug("Completion round %d placed %d words", round_no, placed)
        if not placed:
            break
    return current
