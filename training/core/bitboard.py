# training/core/bitboard.py
from enum import StrEnum
from typing import List, Optional, Sequence, Tuple
from .constants import ROWS, COLS, SLOT, SLOT_MASK, FULL_COL, FULL_BOARD
from .win_masks import WIN_MASKS


class Side(StrEnum):
    A = "A"  # First player
    B = "B"  # Second player

    def flip(self) -> "Side":
        return Side.B if self is Side.A else Side.A


def is_win(bits: int, col: int, row: int) -> bool:
    """True if 'bits' holds a full line through (col, row)."""
    for mask in WIN_MASKS[col][row]:
        if bits & mask == mask:
            return True
    return False


class BitBoard:
    """
    Two disjoint bit-sets, one per side.
    A column's discs always fill the low bits of its 8-bit slot, so the
    slot value of the combined occupancy is 0b0, 0b1, 0b11 ... 0b111111.

    put() does NOT check whose turn it is, and callers must check
    can_put() first: placing into a full column raises IndexError.
    """

    def __init__(self, a: int = 0, b: int = 0):
        self.a = a
        self.b = b

    # --- Serialization ---

    @classmethod
    def from_cols(cls, cols: Sequence[Sequence[str]]) -> "BitBoard":
        """
        Builds a board from 7 columns, each listing its discs bottom-up.
        Raises ValueError on malformed input.
        """
        if len(cols) != COLS:
            raise ValueError(f"Expected {COLS} columns, got {len(cols)}")
        a = b = 0
        for c, column in enumerate(cols):
            if len(column) > ROWS:
                raise ValueError(f"Column {c} holds {len(column)} discs (max {ROWS})")
            for r, value in enumerate(column):
                try:
                    side = Side(value)
                except ValueError:
                    raise ValueError(f"Unknown side {value!r} in column {c}") from None
                bit = 1 << (r + c * SLOT)
                if side is Side.A:
                    a |= bit
                else:
                    b |= bit
        return cls(a, b)

    def to_cols(self) -> List[List[Side]]:
        cols = []
        for c in range(COLS):
            a = self.a >> (c * SLOT)
            column = []
            for r in range(self.fill_level(c)):
                column.append(Side.A if a >> r & 1 else Side.B)
            cols.append(column)
        return cols

    @classmethod
    def from_matrix(cls, matrix: List[List[int]]) -> "BitBoard":
        """
        Converts a 2D matrix (Row 0=Top, 0=Empty, 1=A, 2=B) to a BitBoard (Row 0=Bottom).
        """
        if len(matrix) != ROWS or any(len(row) != COLS for row in matrix):
            raise ValueError(f"Expected a {ROWS}x{COLS} matrix")
        cols = []
        for c in range(COLS):
            column = []
            for r in range(ROWS - 1, -1, -1):
                val = matrix[r][c]
                if val == 0:
                    # Nothing may float above an empty cell
                    if any(matrix[above][c] != 0 for above in range(r)):
                        raise ValueError(f"Floating disc in column {c}")
                    break
                if val not in (1, 2):
                    raise ValueError(f"Unknown cell value {val!r}")
                column.append(Side.A if val == 1 else Side.B)
            cols.append(column)
        return cls.from_cols(cols)

    def to_matrix(self) -> List[List[int]]:
        matrix = [[0] * COLS for _ in range(ROWS)]
        for c, column in enumerate(self.to_cols()):
            for r, side in enumerate(column):
                matrix[ROWS - 1 - r][c] = 1 if side is Side.A else 2
        return matrix

    # --- State ---

    def copy(self) -> "BitBoard":
        return BitBoard(self.a, self.b)

    def key(self) -> Tuple[int, int]:
        """Unique ID for caching"""
        return (self.a, self.b)

    def __eq__(self, other) -> bool:
        if not isinstance(other, BitBoard):
            return NotImplemented
        return self.a == other.a and self.b == other.b

    def __repr__(self) -> str:
        return f"BitBoard(a={self.a:#x}, b={self.b:#x})"

    def _col_val(self, col: int) -> int:
        return (self.a ^ self.b) >> (col * SLOT) & SLOT_MASK

    def fill_level(self, col: int) -> int:
        return self._col_val(col).bit_count()

    def calc_next(self) -> Side:
        """A moves on an even disc count."""
        return Side.A if (self.a ^ self.b).bit_count() % 2 == 0 else Side.B

    def can_put(self, col: int) -> bool:
        return 0 <= col < COLS and self._col_val(col) < FULL_COL

    def list_can_put(self) -> List[int]:
        return [col for col in range(COLS) if self.can_put(col)]

    def put(self, col: int, side: Side) -> bool:
        """
        Drops a disc for 'side' into 'col'.
        Returns True if this disc completes a line.
        """
        o = self._col_val(col)
        row = o.bit_count()
        # Raises IndexError for a full column before anything is written
        masks = WIN_MASKS[col][row]
        move_bit = (o + 1) << (col * SLOT)
        if side is Side.A:
            self.a |= move_bit
            bits = self.a
        else:
            self.b |= move_bit
            bits = self.b
        for mask in masks:
            if bits & mask == mask:
                return True
        return False

    def is_full(self) -> bool:
        return (self.a ^ self.b) == FULL_BOARD

    def calc_winner(self) -> Optional[Side]:
        """Re-tests the topmost disc of every column."""
        for col in range(COLS):
            count = self.fill_level(col)
            if count == 0:
                continue
            a = self.a >> (col * SLOT) & SLOT_MASK
            b = self.b >> (col * SLOT) & SLOT_MASK
            # Whoever owns the highest bit owns the top disc
            if a > b:
                if is_win(self.a, col, count - 1):
                    return Side.A
            elif is_win(self.b, col, count - 1):
                return Side.B
        return None
