"""
grid.py — Cell Grid Container
==============================
Single source of truth for the pathfinding board.  Algorithms, sessions
and the renderer all talk to this object.

Responsibilities:
  1. Creation of a rows × cols board of EMPTY cells
  2. Neighbour queries in a fixed up / down / left / right order
  3. Re-typing single positions                (set_type / mark)
  4. Reset helpers                             (visited + path → empty)
  5. Serialisation                             (to_dict)

Design decisions:
  - Cells are immutable; re-typing swaps one list slot, so a reader on
    another thread always sees a rectangular, fully-typed board.
  - The neighbour order is part of the contract: every algorithm that
    walks neighbours sequentially inherits its tie-breaking from it.
"""

from typing import Iterator, List, Optional, Tuple

from model.cell import Cell, CellType


# (dx, dy) in the order neighbours are reported
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (0, -1),    # up
    (0, 1),     # down
    (-1, 0),    # left
    (1, 0),     # right
)


def heuristic(a: Cell, b: Cell) -> int:
    """Manhattan distance — admissible on a 4-connected unit-cost grid."""
    return abs(a.x - b.x) + abs(a.y - b.y)


class Grid:
    """
    Attributes:
        rows : Number of rows (height).
        cols : Number of columns (width).
        _cells : [row][col] → Cell, with _cells[y][x].key == (x, y).
    """

    def __init__(self, rows: int, cols: int, cells: Optional[List[List[Cell]]] = None):
        if rows < 1 or cols < 1:
            raise ValueError(f"Grid must be at least 1×1, got {rows}×{cols}")
        self.rows: int = rows
        self.cols: int = cols
        if cells is None:
            cells = [[Cell(x, y) for x in range(cols)] for y in range(rows)]
        self._cells: List[List[Cell]] = cells

    @classmethod
    def create(cls, rows: int, cols: int) -> "Grid":
        return cls(rows, cols)

    # ==================================================================
    # LOOKUP
    # ==================================================================
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def get(self, x: int, y: int) -> Cell:
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) is outside a {self.rows}×{self.cols} grid")
        return self._cells[y][x]

    def find(self, cell_type: CellType) -> Optional[Cell]:
        """First cell of the given type in row-major order, or None."""
        for cell in self:
            if cell.type == cell_type:
                return cell
        return None

    def count(self, cell_type: CellType) -> int:
        return sum(1 for cell in self if cell.type == cell_type)

    def neighbours(self, cell: Cell) -> List[Cell]:
        """Up, down, left, right — skipping the border and walls."""
        result = []
        for dx, dy in DIRECTIONS:
            nx, ny = cell.x + dx, cell.y + dy
            if not self.in_bounds(nx, ny):
                continue
            nbr = self._cells[ny][nx]
            if nbr.type == CellType.WALL:
                continue
            result.append(nbr)
        return result

    # ==================================================================
    # MUTATION
    # ==================================================================
    def set_type(self, x: int, y: int, cell_type: CellType) -> Cell:
        """Re-type one position unconditionally and return the new cell."""
        new_cell = self.get(x, y).with_type(cell_type)
        self._cells[y][x] = new_cell
        return new_cell

    def mark(self, cell: Cell, cell_type: CellType) -> bool:
        """Re-type a position unless it currently holds the start or end node."""
        current = self.get(cell.x, cell.y)
        if current.type in (CellType.START, CellType.END):
            return False
        self._cells[cell.y][cell.x] = current.with_type(cell_type)
        return True

    def reset_path_and_visited(self) -> "Grid":
        """Return a copy where every VISITED / PATH cell is EMPTY again."""
        cells = [
            [
                c.with_type(CellType.EMPTY) if c.type in (CellType.VISITED, CellType.PATH) else c
                for c in row
            ]
            for row in self._cells
        ]
        return Grid(self.rows, self.cols, cells)

    # ==================================================================
    # ITERATION / SERIALISATION
    # ==================================================================
    def __iter__(self) -> Iterator[Cell]:
        for row in self._cells:
            yield from list(row)

    def to_dict(self) -> dict:
        return {
            "rows":  self.rows,
            "cols":  self.cols,
            "cells": [[c.type.value for c in row] for row in self._cells],
        }

    def __repr__(self) -> str:
        return f"Grid({self.rows}×{self.cols}, walls={self.count(CellType.WALL)})"
