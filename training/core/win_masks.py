# training/core/win_masks.py
from typing import Tuple
from .constants import ROWS, COLS, SLOT

# (dc, dr): vertical, horizontal, diagonal /, diagonal \
DIRECTIONS = ((0, 1), (1, 0), (1, 1), (1, -1))


def cell_bit(col: int, row: int) -> int:
    return 1 << (row + col * SLOT)


def _line_mask(col: int, row: int, dc: int, dr: int) -> int:
    mask = 0
    for i in range(4):
        mask |= cell_bit(col + dc * i, row + dr * i)
    return mask


def _on_board(col: int, row: int) -> bool:
    return 0 <= col < COLS and 0 <= row < ROWS


def build_win_masks() -> Tuple[Tuple[Tuple[int, ...], ...], ...]:
    """
    For every cell (col, row), every 4-in-a-row mask passing through it.
    Indexed as WIN_MASKS[col][row].
    """
    table = []
    for col in range(COLS):
        column = []
        for row in range(ROWS):
            masks = []
            for dc, dr in DIRECTIONS:
                # The cell can sit at any of the 4 positions of the line
                for offset in range(4):
                    start_col = col - dc * offset
                    start_row = row - dr * offset
                    end_col = start_col + dc * 3
                    end_row = start_row + dr * 3
                    if _on_board(start_col, start_row) and _on_board(end_col, end_row):
                        masks.append(_line_mask(start_col, start_row, dc, dr))
            column.append(tuple(masks))
        table.append(tuple(column))
    return tuple(table)


def all_lines() -> frozenset:
    """Every distinct winning line on the board (69 for 7x6)."""
    return frozenset(m for column in WIN_MASKS for cell in column for m in cell)


# Built once at import, shared read-only by every search
WIN_MASKS = build_win_masks()
