import random
import unittest
from training.core.bitboard import BitBoard, Side
from training.core.constants import COLS, ROWS
from training.core.win_masks import WIN_MASKS, all_lines


def rescan_winner(board: BitBoard):
    """Independent full-board scan over every line."""
    for mask in all_lines():
        if board.a & mask == mask:
            return Side.A
        if board.b & mask == mask:
            return Side.B
    return None


def pattern_side(col: int, row: int) -> Side:
    # Column pairs start with alternating sides: no line anywhere
    return Side.A if (row + col // 2) % 2 == 0 else Side.B


class TestWinMasks(unittest.TestCase):
    def test_line_count(self):
        # 21 vertical + 24 horizontal + 12 + 12 diagonal
        self.assertEqual(len(all_lines()), 69)

    def test_every_mask_has_four_cells_through_its_cell(self):
        for col in range(COLS):
            for row in range(ROWS):
                bit = 1 << (row + col * 8)
                for mask in WIN_MASKS[col][row]:
                    self.assertEqual(mask.bit_count(), 4)
                    self.assertTrue(mask & bit)

    def test_corner_and_center(self):
        # Bottom-left corner: 1 vertical, 1 horizontal, 1 diagonal
        self.assertEqual(len(WIN_MASKS[0][0]), 3)
        # Bottom row, center column: 1 vertical + 4 horizontal + 1 + 1 diagonals
        self.assertEqual(len(WIN_MASKS[3][0]), 7)


class TestBitBoard(unittest.TestCase):
    def play(self, moves):
        """Plays 'moves' alternately from A; only the last one must win."""
        board = BitBoard()
        side = Side.A
        for i, col in enumerate(moves):
            last = i == len(moves) - 1
            self.assertTrue(board.can_put(col))
            self.assertEqual(board.calc_next(), side)
            self.assertEqual(board.put(col, side), last)
            self.assertEqual(board.calc_winner(), side if last else None)
            self.assertFalse(board.is_full())
            side = side.flip()
        return board

    def test_vertical_win(self):
        board = self.play([3, 2, 3, 2, 4, 2, 5, 2])
        self.assertEqual(board.calc_winner(), Side.B)
        self.assertEqual(board.fill_level(2), 4)

    def test_vertical_win_on_top_of_opponent(self):
        board = self.play([3, 3, 0, 2, 2, 3, 2, 3, 2, 3])
        self.assertEqual(board.calc_winner(), Side.B)

    def test_diagonal_win_long_game(self):
        board = self.play([
            3, 3, 3, 5, 3, 2, 2, 2, 4, 3, 1, 2,
            4, 0, 2, 1, 6, 1, 1, 1, 6, 3, 2, 0,
        ])
        self.assertEqual(board.calc_winner(), Side.B)

    def test_first_player_win(self):
        board = self.play([
            3, 3, 3, 2, 3, 2, 3, 3, 5, 6, 5, 0,
            5, 5, 2, 0, 2, 0, 0, 2, 6, 4, 4,
        ])
        self.assertEqual(board.calc_winner(), Side.A)

    def test_is_full_flips_once(self):
        board = BitBoard()
        flips = 0
        was_full = board.is_full()
        for col in range(COLS):
            for row in range(ROWS):
                self.assertTrue(board.can_put(col))
                self.assertFalse(board.put(col, pattern_side(col, row)))
                if board.is_full() != was_full:
                    flips += 1
                    was_full = board.is_full()
            self.assertFalse(board.can_put(col))
        self.assertEqual(flips, 1)
        self.assertTrue(board.is_full())
        self.assertIsNone(board.calc_winner())
        self.assertEqual(board.list_can_put(), [])

    def test_out_of_range_columns_cannot_be_played(self):
        board = BitBoard()
        self.assertFalse(board.can_put(-1))
        self.assertFalse(board.can_put(COLS))
        self.assertFalse(board.can_put(COLS + 5))
        self.assertEqual(board.list_can_put(), list(range(COLS)))

    def test_calc_next_alternates(self):
        board = BitBoard()
        side = Side.A
        for col in [0, 1, 2, 3, 4, 5, 6, 0, 1]:
            self.assertEqual(board.calc_next(), side)
            board.put(col, side)
            self.assertEqual(board.calc_next(), side.flip())
            side = side.flip()

    def test_put_into_full_column_raises_and_keeps_board(self):
        board = BitBoard()
        for row in range(ROWS):
            board.put(0, Side.A if row % 2 == 0 else Side.B)
        before = board.copy()
        with self.assertRaises(IndexError):
            board.put(0, Side.A)
        self.assertEqual(board, before)

    def test_copy_is_independent(self):
        board = BitBoard()
        board.put(3, Side.A)
        clone = board.copy()
        clone.put(3, Side.B)
        self.assertEqual(board.fill_level(3), 1)
        self.assertEqual(clone.fill_level(3), 2)
        self.assertNotEqual(board, clone)

    def test_random_games_agree_with_rescan(self):
        """Incremental win flag, calc_winner and a full rescan always agree."""
        rng = random.Random(7)
        for _ in range(200):
            board = BitBoard()
            while True:
                side = board.calc_next()
                won = board.put(rng.choice(board.list_can_put()), side)
                self.assertEqual(board.calc_winner(), side if won else None)
                self.assertEqual(rescan_winner(board), side if won else None)
                if won or board.is_full():
                    break


class TestSerialization(unittest.TestCase):
    def random_board(self, rng):
        board = BitBoard()
        for _ in range(rng.randrange(0, 30)):
            side = board.calc_next()
            if board.put(rng.choice(board.list_can_put()), side):
                break
        return board

    def test_cols_round_trip(self):
        rng = random.Random(3)
        for _ in range(100):
            board = self.random_board(rng)
            self.assertEqual(BitBoard.from_cols(board.to_cols()), board)

    def test_matrix_round_trip(self):
        rng = random.Random(5)
        for _ in range(100):
            board = self.random_board(rng)
            self.assertEqual(BitBoard.from_matrix(board.to_matrix()), board)

    def test_from_cols_reads_bottom_up(self):
        board = BitBoard.from_cols([["A", "B"], [], [], ["B"], [], [], []])
        self.assertEqual(board.fill_level(0), 2)
        self.assertEqual(board.to_matrix()[5][0], 1)
        self.assertEqual(board.to_matrix()[4][0], 2)
        self.assertEqual(board.to_matrix()[5][3], 2)
        self.assertEqual(board.calc_next(), Side.B)

    def test_from_cols_rejects_malformed(self):
        with self.assertRaises(ValueError):
            BitBoard.from_cols([[]] * 6)
        with self.assertRaises(ValueError):
            BitBoard.from_cols([["A"] * 7] + [[]] * 6)
        with self.assertRaises(ValueError):
            BitBoard.from_cols([["X"]] + [[]] * 6)

    def test_from_matrix_rejects_floating_disc(self):
        matrix = [[0] * 7 for _ in range(6)]
        matrix[3][2] = 1
        with self.assertRaises(ValueError):
            BitBoard.from_matrix(matrix)

    def test_from_matrix_rejects_wrong_shape(self):
        with self.assertRaises(ValueError):
            BitBoard.from_matrix([[0] * 7 for _ in range(5)])


if __name__ == '__main__':
    unittest.main()
