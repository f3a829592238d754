"""Configuration and the current family tree snapshot."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .indexer import TreeIndex, build_index
from .models import FamilyTreeData
from .pathfinding import Graph, build_graph
from .telemetry import get_tracer

logger = logging.getLogger(__name__)

# Configuration (set by configure() at startup)
DATA_FILE: Path | None = None
HOME_PERSON_ID: str | None = None


@dataclass(frozen=True)
class Snapshot:
    """A loaded dataset together with every index derived from it."""

    generation: int
    data: FamilyTreeData
    index: TreeIndex  # all relationships
    public_index: TreeIndex  # secret relationships left out
    graph: Graph

    def index_for(self, show_secrets: bool = True) -> TreeIndex:
        return self.index if show_secrets else self.public_index


# Replaced wholesale by install(); never mutated in place
_snapshot: Snapshot | None = None
_generation = 0


def _resolve_data_path() -> Path:
    """Get the dataset path from FAMILY_TREE_FILE env var.

    Raises:
        FileNotFoundError: If FAMILY_TREE_FILE env var not set or file doesn't exist.
    """
    env_path = os.getenv("FAMILY_TREE_FILE")
    if not env_path:
        raise FileNotFoundError(
            "FAMILY_TREE_FILE environment variable not set.\n"
            "Set it to the path of your family tree JSON file:\n"
            "  export FAMILY_TREE_FILE=/path/to/complete_lineage.json\n"
            "Or use the --data-file CLI argument:\n"
            "  lineage-server --data-file /path/to/complete_lineage.json"
        )
    path = Path(env_path).expanduser().resolve()
    if not path.exists():
        raise FileNotFoundError(f"Family tree file not found: {path}")
    return path


def configure() -> None:
    """Initialize configuration from environment. Called at startup.

    Loads .env file if present, then reads FAMILY_TREE_FILE from environment.
    Note: load_dotenv() does NOT override existing env vars by default.
    """
    global DATA_FILE
    load_dotenv()
    DATA_FILE = _resolve_data_path()


def install(data: FamilyTreeData) -> Snapshot:
    """Build all indexes for a dataset and make it the current snapshot.

    Everything is built before the swap, so queries never see indexes from
    two different datasets.
    """
    global _snapshot, _generation

    with get_tracer().start_as_current_span("build_indexes") as span:
        span.set_attribute("lineage.persons", len(data.persons))
        span.set_attribute("lineage.relationships", len(data.relationships))
        index = build_index(data, include_secrets=True)
        snapshot = Snapshot(
            generation=_generation + 1,
            data=data,
            index=index,
            public_index=build_index(data, include_secrets=False),
            graph=build_graph(index),
        )

    _generation = snapshot.generation
    _snapshot = snapshot
    logger.info(
        f"Installed family tree snapshot {snapshot.generation}: "
        f"{len(data.persons)} persons, {len(data.houses)} houses, "
        f"{len(data.relationships)} relationships"
    )
    return snapshot


def current() -> Snapshot:
    """Return the current snapshot.

    Raises:
        RuntimeError: If no dataset has been loaded yet.
    """
    if _snapshot is None:
        raise RuntimeError("Family tree data not loaded; call load_family_tree() first")
    return _snapshot


def is_loaded() -> bool:
    return _snapshot is not None


def index_for(show_secrets: bool = True) -> TreeIndex:
    """Index matching a secret-visibility setting for the current snapshot."""
    return current().index_for(show_secrets)


def _detect_home_person() -> str | None:
    """Auto-detect home person as the person with most family connections.

    Scores each person by: parents + children + partners, with a bonus for
    grandparents. Returns the highest-scoring person's ID.
    """
    if not is_loaded():
        return None
    index = current().index
    if not index.persons:
        return None

    def score_person(person_id: str) -> int:
        """Calculate connection score for a person."""
        score = 0
        for parent_id in index.parents_by_child.get(person_id, ()):
            if parent_id in index.person_by_id:
                score += 2
                # Score for having grandparents
                if index.parents_by_child.get(parent_id):
                    score += 1
        for partner_id in index.partners_by_person.get(person_id, ()):
            if partner_id in index.person_by_id:
                score += 1
        score += len(index.children_by_parent.get(person_id, ()))
        return score

    best_id = None
    best_score = -1
    for person in index.persons:
        score = score_person(person.id)
        if score > best_score:
            best_score = score
            best_id = person.id

    return best_id
