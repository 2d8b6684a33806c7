"""
canvas.py — SVG Grid & Bar Renderers
======================================
Pure rendering functions: model snapshot → SVG string.

    render_grid(grid)     – one <rect> per cell, coloured by CellType
    render_bars(array)    – one <rect> per ArrayElement, bottom-aligned,
                            coloured by ElementStatus

Design decisions:
  - NO mutation.  The caller passes in everything it needs and gets back
    a string; the web layer calls these on every poll.
  - Colouring is a dict lookup: CellType / ElementStatus value → hex.
  - Cells carry data-x / data-y so the page can map a click back to grid
    coordinates without knowing the cell size.
"""

from typing import Dict, List

from model import ArrayElement, CellType, ElementStatus, Grid


# ---------------------------------------------------------------------------
# Visual Config: color palette, dimensions
# ---------------------------------------------------------------------------
class CanvasConfig:
    bg: str = "#0d1117"

    # grid
    cell_size:   int = 32
    cell_gap:    int = 1
    cell_stroke: str = "#30363d"
    cell_colors: Dict[str, str] = {
        CellType.EMPTY.value:   "#e5e7eb",   # light grey
        CellType.WALL.value:    "#374151",   # dark grey
        CellType.START.value:   "#22c55e",   # green
        CellType.END.value:     "#ef4444",   # red
        CellType.VISITED.value: "#93c5fd",   # light blue
        CellType.PATH.value:    "#facc15",   # yellow
    }

    # bars
    bars_width:  int = 900
    bars_height: int = 320
    bar_gap:     int = 1
    bar_colors: Dict[str, str] = {
        ElementStatus.DEFAULT.value:        "#3b82f6",   # blue
        ElementStatus.COMPARING.value:      "#ef4444",   # red
        ElementStatus.SWAP.value:           "#f59e0b",   # amber
        ElementStatus.POTENTIAL_SWAP.value: "#34d399",   # light green
        ElementStatus.SORTED.value:         "#10b981",   # dark green
    }


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------
def render_grid(grid: Grid, config: CanvasConfig = CONFIG) -> str:
    """Returns an SVG string of the whole board."""
    step = config.cell_size + config.cell_gap
    width = grid.cols * step + config.cell_gap
    height = grid.rows * step + config.cell_gap

    svg_parts = [
        f'<svg id="grid-svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">'
    ]
    for cell in grid:
        fill = config.cell_colors.get(cell.type.value, config.cell_colors["empty"])
        x = config.cell_gap + cell.x * step
        y = config.cell_gap + cell.y * step
        svg_parts.append(
            f'<rect class="cell cell-{cell.type.value}" data-x="{cell.x}" data-y="{cell.y}" '
            f'x="{x}" y="{y}" width="{config.cell_size}" height="{config.cell_size}" '
            f'fill="{fill}" stroke="{config.cell_stroke}"/>'
        )
    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


# ---------------------------------------------------------------------------
# Bars
# ---------------------------------------------------------------------------
def render_bars(array: List[ArrayElement], config: CanvasConfig = CONFIG) -> str:
    """Returns an SVG string with one bottom-aligned bar per element."""
    width, height = config.bars_width, config.bars_height
    svg_parts = [
        f'<svg id="bars-svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">'
    ]
    if array:
        bar_width = width / len(array)
        for index, element in enumerate(array):
            fill = config.bar_colors.get(element.status.value, config.bar_colors["default"])
            bar_height = min(element.value, height)
            svg_parts.append(
                f'<rect class="bar bar-{element.status.value}" data-index="{index}" '
                f'x="{index * bar_width:.2f}" y="{height - bar_height}" '
                f'width="{max(bar_width - config.bar_gap, 1):.2f}" height="{bar_height}" '
                f'fill="{fill}"/>'
            )
    svg_parts.append("</svg>")
    return "\n".join(svg_parts)
