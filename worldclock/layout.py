"""Grid geometry: one focus cell on top, up to six cells below, a footer.

The grid area (everything above the footer) is split into three rows of equal
height. The focus cell takes the first row; secondary cells fill the other two
in row-major order, three per row. Integer-division remainders are absorbed by
the last row and the last cell of each row so the rectangles tile the whole
terminal without gaps or overlaps.
"""

from __future__ import annotations

from dataclasses import dataclass

FOOTER_HEIGHT = 2
ITEMS_PER_ROW = 3
MAX_SECONDARY = 6
GRID_ROWS = 3


@dataclass(frozen=True)
class Rect:
    """Inclusive character-cell rectangle. ``x1 < x0`` or ``y1 < y0`` means
    the rectangle is empty."""

    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def width(self) -> int:
        return max(0, self.x1 - self.x0 + 1)

    @property
    def height(self) -> int:
        return max(0, self.y1 - self.y0 + 1)

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def empty(self) -> bool:
        return self.area == 0

    def inset(self, n: int = 1) -> Rect:
        """Shrink by *n* on every side (the area inside a border)."""
        return Rect(self.x0 + n, self.y0 + n, self.x1 - n, self.y1 - n)

    def cells(self) -> set[tuple[int, int]]:
        return {
            (x, y)
            for y in range(self.y0, self.y0 + self.height)
            for x in range(self.x0, self.x0 + self.width)
        }


@dataclass(frozen=True)
class GridLayout:
    focus: Rect
    secondary: tuple[Rect, ...]
    footer: Rect

    def all_rects(self) -> list[Rect]:
        return [self.focus, *self.secondary, self.footer]


def grid_position(index: int) -> tuple[int, int]:
    """(row, col) of the 1-based secondary slot *index* within the grid."""
    return divmod(index - 1, ITEMS_PER_ROW)


def compute_layout(
    width: int,
    height: int,
    secondary_count: int,
    footer_height: int = FOOTER_HEIGHT,
) -> GridLayout:
    """Lay out the focus cell, *secondary_count* cells and the footer.

    Never raises: degenerate sizes yield empty rectangles.
    """
    width = max(0, width)
    height = max(0, height)
    count = max(0, min(secondary_count, MAX_SECONDARY))

    footer_top = max(0, height - footer_height)
    grid_height = footer_top
    row_height = grid_height // GRID_ROWS
    col_width = width // ITEMS_PER_ROW

    if count:
        focus = Rect(0, 0, width - 1, row_height - 1)
    else:
        focus = Rect(0, 0, width - 1, grid_height - 1)

    last_row = (count - 1) // ITEMS_PER_ROW
    secondary: list[Rect] = []
    for i in range(1, count + 1):
        row, col = grid_position(i)

        x0 = col * col_width
        x1 = x0 + col_width - 1
        if col == ITEMS_PER_ROW - 1 or i == count:
            x1 = width - 1

        y0 = (row + 1) * row_height
        y1 = y0 + row_height - 1
        if row == last_row:
            y1 = grid_height - 1

        secondary.append(Rect(x0, y0, x1, y1))

    footer = Rect(0, footer_top, width - 1, height - 1)
    return GridLayout(focus=focus, secondary=tuple(secondary), footer=footer)
