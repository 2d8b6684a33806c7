"""
model/
------
Core data layer.  Public API:

    from model import Grid, Cell, CellType, heuristic
    from model import ArrayElement, ElementStatus
"""

from model.cell    import Cell, CellType, PLACEABLE
from model.grid    import Grid, heuristic, DIRECTIONS
from model.element import (
    ArrayElement,
    ElementStatus,
    random_elements,
    from_values,
    values_of,
)

__all__ = [
    "Cell",         "CellType",      "PLACEABLE",
    "Grid",         "heuristic",     "DIRECTIONS",
    "ArrayElement", "ElementStatus",
    "random_elements", "from_values", "values_of",
]
