"""Persistent layout document store.

Every saved run is written as a JSON document under
``local_db/collections/layouts/``. Documents carry the generator settings,
the input words and every ranked layout with its metrics.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Sequence

from ..core.models import FinishedLayout
from ..utils.logger import get_logger

if TYPE_CHECKING:
    from .generator import GenerationResult, GeneratorConfig


LOGGER = get_logger(__name__)

DEFAULT_STORE_DIR = Path("local_db/collections/layouts")


class LayoutStore:
    """Save ranked generation results as structured JSON documents."""

    def __init__(self, store_dir: Path | str = DEFAULT_STORE_DIR) -> None:
        self.store_dir = Path(store_dir)
        self.store_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def save(
        self,
        result: "GenerationResult",
        config: "GeneratorConfig",
        words: Sequence[str],
    ) -> str:
        """Persist a run and return its document ID."""
        doc_id = self._new_id()
        doc = {
            "id": doc_id,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "config": self._serialize_config(config),
            "words": list(words),
            "attempts": result.attempts,
            "unique_count": result.unique_count,
            "cancelled": result.cancelled,
            "best_id": result.best.id if result.best else None,
            "layouts": [layout.to_dict() for layout in result.layouts],
        }
        path = self.path_for(doc_id)
        path.write_text(json.dumps(doc, ensure_ascii=False, indent=2), encoding="utf-8")
        LOGGER.info("Layouts saved: %s (%d layouts)", doc_id, len(result.layouts))
        return doc_id

    def load(self, doc_id: str) -> Dict[str, Any]:
        return json.loads(self.path_for(doc_id).read_text(encoding="utf-8"))

    def load_layouts(self, doc_id: str) -> List[FinishedLayout]:
        return [FinishedLayout.from_dict(item) for item in self.load(doc_id)["layouts"]]

    def list_ids(self) -> List[str]:
        return sorted(path.stem for path in self.store_dir.glob("*.json"))

    def path_for(self, doc_id: str) -> Path:
        return self.store_dir / f"{doc_id}.json"

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _serialize_config(config: "GeneratorConfig") -> dict:
        return {
            "attempts": config.attempts,
            "min_beam_width": config.min_beam_width,
            "beam_width_per_word": config.beam_width_per_word,
            "seed": config.seed,
            "top_results": config.top_results,
            "search": asdict(config.search),
        }

    @staticmethod
    def _new_id() -> str:
        ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S")
        short_uuid = uuid.uuid4().hex[:8]
        return f"{ts}_{short_uuid}"
