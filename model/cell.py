from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple


# ---------------------------------------------------------------------------
# Cell Type Enum: maps 1-to-1 with the grid legend
# ---------------------------------------------------------------------------
class CellType(Enum):
    EMPTY    = "empty"     # light grey
    WALL     = "wall"      # dark grey: user-placed obstacle
    START    = "start"     # green: search origin
    END      = "end"       # red: search goal
    VISITED  = "visited"   # light blue: reached by the running search
    PATH     = "path"      # yellow: on the reconstructed path


# cell types a moved start/end node may land on
PLACEABLE = frozenset({CellType.EMPTY, CellType.VISITED, CellType.PATH})


# ---------------------------------------------------------------------------
# Cell
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Cell:
    """
    One grid position.  Immutable: the grid re-types a position by swapping
    in a new Cell, so a renderer never sees a half-updated cell.

    Attributes:
        x    : Column index (0 = left).
        y    : Row index (0 = top).
        type : Current CellType.
    """

    x:    int
    y:    int
    type: CellType = CellType.EMPTY

    @property
    def key(self) -> Tuple[int, int]:
        """Identity of the position, independent of its type."""
        return (self.x, self.y)

    def with_type(self, cell_type: CellType) -> "Cell":
        return replace(self, type=cell_type)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "type": self.type.value}

    def __repr__(self) -> str:
        return f"Cell({self.x},{self.y},{self.type.value})"
