"""Attempt orchestration: many randomized searches, ranked and de-duplicated.

Each attempt shuffles the words, draws a beam width and a seed
orientation, runs :class:`~crosslayout.engine.search.BeamSearch` followed
by the completion pass, scores the finished layout and keeps it only if
no rotation or reflection of it was accepted before.
"""

from __future__ import annotations

import queue
import random
import threading
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Protocol, Sequence

from ..core.constants import MIN_WORD_LENGTH, Orientation
from ..core.exceptions import (ConfigError, DuplicateWordError, EmptyWordListError,
                               GenerationCancelled, InvalidWordError)
from ..core.models import BeamState, FinishedLayout
from ..utils.logger import get_logger
from .canonical import SignatureRegistry
from .scoring import attempt_metrics
from .search import BeamSearch, SearchConfig, complete_layout


LOGGER = get_logger(__name__)


class CancelToken(Protocol):
    def is_set(self) -> bool:
        ...


@dataclass
class GeneratorConfig:
    attempts: int = 100
    min_beam_width: int = 50
    beam_width_per_word: int = 10
    seed: Optional[int] = None
    top_results: Optional[int] = 20
    search: SearchConfig = field(default_factory=SearchConfig)

    def validate(self) -> None:
        if self.attempts < 1:
            raise ConfigError("attempts must be at least 1")
        if self.min_beam_width < 1:
            raise ConfigError("min_beam_width must be at least 1")
        if self.beam_width_per_word < 0:
            raise ConfigError("beam_width_per_word must not be negative")
        if self.top_results is not None and self.top_results < 1:
            raise ConfigError("top_results must be at least 1 when set")
        self.search.validate()

    def to_search_config(self) -> SearchConfig:
        return self.search

    def beam_width_for(self, word_count: int, rng: random.Random) -> int:
        spread = max(1, word_count * self.beam_width_per_word)
        return self.min_beam_width + rng.randrange(spread)


@dataclass
class AttemptEvent:
    """Progress report emitted after every attempt."""

    attempt: int
    total: int
    accepted: bool
    layout: FinishedLayout
    best: Optional[FinishedLayout]
    unique_count: int


@dataclass
class GenerationResult:
    layouts: List[FinishedLayout]
    best: Optional[FinishedLayout]
    attempts: int
    unique_count: int
    total_words: int
    seed: Optional[int] = None
    cancelled: bool = False


def rank_layouts(layouts: Sequence[FinishedLayout]) -> List[FinishedLayout]:
    return sorted(layouts, key=lambda layout: (-layout.score, layout.id))


def prepare_words(words: Sequence[str]) -> List[str]:
    """Check the engine's input contract and return the words as a list.

    Words must already be upper-cased by the caller.
    """

    if not words:
        LOGGER.error("Refusing to generate a layout without words")
        raise EmptyWordListError("At least one word is required")
    seen = set()
    for word in words:
        if len(word) < MIN_WORD_LENGTH or any(ch.isspace() for ch in word):
            raise InvalidWordError(
                f"Invalid word {word!r}: need at least {MIN_WORD_LENGTH} letters and no whitespace"
            )
        if word in seen:
            raise DuplicateWordError(f"Word {word!r} appears more than once")
        seen.add(word)
    return list(words)


def finish_layout(
    attempt_id: int, state: BeamState, total_words: int, beam_width: Optional[int] = None
) -> FinishedLayout:
    """Normalize a terminal search state to its bounding box and score it."""
    bounds = state.grid.bounds
    placements = [p.shifted(-bounds.min_x, -bounds.min_y) for p in state.placements]
    return FinishedLayout(
        id=attempt_id,
        table=state.grid.to_table(),
        placements=placements,
        metrics=attempt_metrics(state.grid, state.placements, total_words),
        remaining=list(state.remaining),
        beam_width=beam_width,
    )


class LayoutGenerator:
    """High-level orchestrator: repeated beam searches, ranked unique results."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.config.validate()
        self._owns_rng = rng is None
        self.rng = rng or random.Random(self.config.seed)
        self._reset_state()

    # ------------------------------------------------------------------
    # Public entrypoints
    # ------------------------------------------------------------------
    def generate(
        self,
        words: Sequence[str],
        progress: Optional[Callable[[AttemptEvent], None]] = None,
        cancel_event: Optional[CancelToken] = None,
    ) -> GenerationResult:
        for event in self.iter_attempts(words, cancel_event=cancel_event):
            if progress is not None:
                progress(event)
        return self.result(cancelled=bool(cancel_event and cancel_event.is_set()))

    def iter_attempts(
        self,
        words: Sequence[str],
        cancel_event: Optional[CancelToken] = None,
    ) -> Iterator[AttemptEvent]:
        """Run every attempt, yielding an :class:`AttemptEvent` after each one."""
        words = prepare_words(words)
        self._reset_state()
        self._total_words = len(words)
        total = self.config.attempts
        LOGGER.info("Generating layouts for %d words over %d attempts", len(words), total)

        for attempt in range(1, total + 1):
            if cancel_event is not None and cancel_event.is_set():
                LOGGER.info("Generation cancelled before attempt %d", attempt)
                return
            layout = self.run_attempt(attempt, words, cancel_event)
            if layout is None:
                LOGGER.info("Generation cancelled during attempt %d", attempt)
                return
            self.attempts_run = attempt

            accepted = self.registry.register(layout.table)
            if accepted:
                self.layouts.append(layout)
                if self.best is None or layout.score > self.best.score:
                    self.best = layout
            LOGGER.info(
                "Attempt %s/%s: %d/%d words, score %.2f%s (unique %d, best %.2f)",
                attempt,
                total,
                layout.metrics.word_count,
                layout.metrics.total_words,
                layout.score,
                "" if accepted else " [duplicate]",
                len(self.layouts),
                self.best.score if self.best else 0.0,
            )
            yield AttemptEvent(
                attempt=attempt,
                total=total,
                accepted=accepted,
                layout=layout,
                best=self.best,
                unique_count=len(self.layouts),
            )

    def run_attempt(
        self,
        attempt_id: int,
        words: Sequence[str],
        cancel_event: Optional[CancelToken] = None,
    ) -> Optional[FinishedLayout]:
        """One randomized search; ``None`` if cancelled between beam steps."""
        beam_width = self.config.beam_width_for(len(words), self.rng)
        order = list(words)
        self.rng.shuffle(order)
        orientation = Orientation.ACROSS if self.rng.random() > 0.5 else Orientation.DOWN

        search = BeamSearch(
            order,
            beam_width=beam_width,
            orientation=orientation,
            rng=self.rng,
            config=self.config.to_search_config(),
        )
        for _ in search.steps():
            if cancel_event is not None and cancel_event.is_set():
                return None
        state = complete_layout(search.best(), rounds=self.config.search.completion_rounds)
        LOGGER.debug(
            "Attempt %d: beam width %d, %d steps, %s, %d leftover",
            attempt_id,
            beam_width,
            search.steps_taken,
            search.phase.value,
            len(state.remaining),
        )
        return finish_layout(attempt_id, state, len(words), beam_width)

    def result(self, cancelled: bool = False) -> GenerationResult:
        ranked = rank_layouts(self.layouts)
        if self.config.top_results is not None:
            ranked = ranked[: self.config.top_results]
        return GenerationResult(
            layouts=ranked,
            best=self.best,
            attempts=self.attempts_run,
            unique_count=len(self.layouts),
            total_words=self._total_words,
            seed=self.config.seed,
            cancelled=cancelled,
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    def _reset_state(self) -> None:
        if self._owns_rng and self.config.seed is not None:
            self.rng = random.Random(self.config.seed)
        self.registry = SignatureRegistry()
        self.layouts: List[FinishedLayout] = []
        self.best: Optional[FinishedLayout] = None
        self.attempts_run = 0
        self._total_words = 0


_DONE = object()


class GenerationWorker:
    """Runs a generator on a background thread and streams its events.

    Events arrive through :meth:`events`; :meth:`cancel` stops the run at
    the next beam step or attempt boundary.
    """

    def __init__(self, generator: LayoutGenerator, words: Sequence[str]) -> None:
        self.generator = generator
        self.words = list(words)
        self._events: "queue.Queue[object]" = queue.Queue()
        self._cancel = threading.Event()
        self._result: Optional[GenerationResult] = None
        self._error: Optional[BaseException] = None
        self._thread = threading.Thread(target=self._run, name="layout-generator", daemon=True)

    def start(self) -> "GenerationWorker":
        self._thread.start()
        return self

    def cancel(self) -> None:
        self._cancel.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    def events(self) -> Iterator[AttemptEvent]:
        while True:
            item = self._events.get()
            if item is _DONE:
                return
            yield item  # type: ignore[misc]

    def result(self, timeout: Optional[float] = None) -> GenerationResult:
        """Wait for the run to end.

        Raises ``TimeoutError`` if the run is still going after ``timeout``
        seconds; the worker keeps running and can be asked again.
        """
        self._thread.join(timeout)
        if self._thread.is_alive():
            raise TimeoutError(f"Generation still running after {timeout}s")
        if self._error is not None:
            raise self._error
        if self._result is None:
            raise GenerationCancelled("Generation stopped without a result")
        if self._result.cancelled and self._result.best is None:
            raise GenerationCancelled("Generation cancelled before any attempt completed")
        return self._result

    def _run(self) -> None:
        try:
            for event in self.generator.iter_attempts(self.words, cancel_event=self._cancel):
                self._events.put(event)
            self._result = self.generator.result(cancelled=self._cancel.is_set())
        except Exception as exc:  # handed to the consumer in result()
            LOGGER.error("Background generation failed: %s", exc)
            self._error = exc
        finally:
            self._events.put(_DONE)


def generate_layouts(words: Sequence[str], **config_kwargs) -> GenerationResult:
    """Shortcut: build a generator from keyword settings and run it."""
    return LayoutGenerator(GeneratorConfig(**config_kwargs)).generate(words)
