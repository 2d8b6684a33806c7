"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import PATHFINDING, SORTING, get_algorithm

Both tables are dicts of key → AlgoInfo:
    {
        "dijkstra":    AlgoInfo(key, label, fn, kind="pathfinding", …),
        "bubble_sort": AlgoInfo(key, label, fn, kind="sorting", …),
        …
    }

Pathfinding runners take a PathfindingContext and return a SearchResult
(or None when start / end is missing).  Sorting runners take a
SortingContext and return nothing.  The sessions and the UI both consume
AlgoInfo, so adding an algorithm is: write the coroutine, add one entry.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from algorithms.context import (
    Outcome,
    PathfindingContext,
    SearchResult,
    SortingContext,
)

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.dijkstra       import dijkstra       as _dijkstra,  PSEUDOCODE as _dij_pc
from algorithms.astar          import astar          as _astar,     PSEUDOCODE as _ast_pc
from algorithms.dfs            import dfs            as _dfs,       PSEUDOCODE as _dfs_pc
from algorithms.bidirectional  import bidirectional  as _bidir,     PSEUDOCODE as _bidir_pc
from algorithms.bubble_sort    import bubble_sort    as _bubble,    PSEUDOCODE as _bubble_pc
from algorithms.selection_sort import selection_sort as _selection, PSEUDOCODE as _sel_pc
from algorithms.shaker_sort    import shaker_sort    as _shaker,    PSEUDOCODE as _shaker_pc
from algorithms.merge_sort     import merge_sort     as _merge,     PSEUDOCODE as _merge_pc


PATHFINDING_KIND = "pathfinding"
SORTING_KIND = "sorting"


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "dijkstra"
    label:            str                    # human label, e.g. "Dijkstra's Algorithm"
    fn:               Callable               # the coroutine function
    kind:             str                    # "pathfinding" | "sorting"
    pseudocode:       List[str] = field(default_factory=list)
    guarantees_shortest: bool  = False       # pathfinding only
    stable:           bool     = False       # sorting only
    complexity_time:  str      = ""          # e.g. "O(n²)"
    complexity_space: str      = ""          # e.g. "O(1)"
    description:      str      = ""          # paragraph for the description card

    @property
    def traits(self) -> List[str]:
        """Badges for the description card."""
        if self.kind == PATHFINDING_KIND:
            return ["Shortest path" if self.guarantees_shortest else "Any path"]
        return ["Stable" if self.stable else "Unstable"]

    def to_dict(self) -> dict:
        return {
            "key":              self.key,
            "label":            self.label,
            "kind":             self.kind,
            "guarantees_shortest": self.guarantees_shortest,
            "stable":           self.stable,
            "traits":           self.traits,
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRIES
# ---------------------------------------------------------------------------
PATHFINDING: Dict[str, AlgoInfo] = {

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=_dijkstra,
        kind=PATHFINDING_KIND, pseudocode=_dij_pc, guarantees_shortest=True,
        complexity_time="O(V² log V)", complexity_space="O(V)",
        description=(
            "Expands the closest unexplored cell first, spreading out evenly "
            "in every direction. Guarantees the shortest path."
        ),
    ),

    "astar": AlgoInfo(
        key="astar", label="A* Search", fn=_astar,
        kind=PATHFINDING_KIND, pseudocode=_ast_pc, guarantees_shortest=True,
        complexity_time="O(V² log V)", complexity_space="O(V)",
        description=(
            "Dijkstra guided by the Manhattan distance to the goal. Explores "
            "towards the target and still finds the shortest path."
        ),
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", fn=_dfs,
        kind=PATHFINDING_KIND, pseudocode=_dfs_pc,
        complexity_time="O(V + E)", complexity_space="O(V)",
        description=(
            "Dives as deep as possible before backtracking. Finds a path if "
            "one exists but NOT necessarily the shortest."
        ),
    ),

    "bidirectional": AlgoInfo(
        key="bidirectional", label="Bidirectional Search", fn=_bidir,
        kind=PATHFINDING_KIND, pseudocode=_bidir_pc,
        complexity_time="O(b^(d/2))", complexity_space="O(b^(d/2))",
        description=(
            "Two breadth-first searches, one from each end, take turns until "
            "their frontiers meet in the middle."
        ),
    ),
}


SORTING: Dict[str, AlgoInfo] = {

    "bubble_sort": AlgoInfo(
        key="bubble_sort", label="Bubble Sort", fn=_bubble,
        kind=SORTING_KIND, pseudocode=_bubble_pc, stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description=(
            "Repeatedly swaps adjacent bars that are out of order. Stops early "
            "once a full pass makes no swap."
        ),
    ),

    "selection_sort": AlgoInfo(
        key="selection_sort", label="Selection Sort", fn=_selection,
        kind=SORTING_KIND, pseudocode=_sel_pc,
        complexity_time="O(n²)", complexity_space="O(1)",
        description=(
            "Finds the smallest remaining bar and swaps it into the next "
            "position. At most one swap per position."
        ),
    ),

    "shaker_sort": AlgoInfo(
        key="shaker_sort", label="Shaker Sort", fn=_shaker,
        kind=SORTING_KIND, pseudocode=_shaker_pc, stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description=(
            "Bubble sort in both directions: large bars sink right on the way "
            "forward, small bars rise left on the way back."
        ),
    ),

    "merge_sort": AlgoInfo(
        key="merge_sort", label="Merge Sort", fn=_merge,
        kind=SORTING_KIND, pseudocode=_merge_pc, stable=True,
        complexity_time="O(n log n)", complexity_space="O(n)",
        description=(
            "Splits the array in halves, sorts each half, then merges the "
            "sorted halves back together."
        ),
    ),
}


REGISTRY: Dict[str, AlgoInfo] = {**PATHFINDING, **SORTING}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str, kind: Optional[str] = None) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key (optionally restricted to one kind), or None."""
    info = REGISTRY.get(key)
    if info is None or (kind is not None and info.kind != kind):
        return None
    return info


def list_algorithms(kind: Optional[str] = None) -> List[AlgoInfo]:
    """Return registered algorithms in insertion order."""
    return [a for a in REGISTRY.values() if kind is None or a.kind == kind]


__all__ = [
    "AlgoInfo",
    "PATHFINDING",
    "SORTING",
    "REGISTRY",
    "PATHFINDING_KIND",
    "SORTING_KIND",
    "get_algorithm",
    "list_algorithms",
    "Outcome",
    "PathfindingContext",
    "SearchResult",
    "SortingContext",
]
