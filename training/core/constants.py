# training/core/constants.py

# --- Board Dimensions ---
ROWS = 6
COLS = 7

# --- Bit Layout ---
# Each column owns an 8-bit slot: 6 playable rows + 2 guard bits.
# Cell address = row + col * SLOT
SLOT = 8
SLOT_MASK = 0xFF
FULL_COL = 0x3F
FULL_BOARD = 0x3F3F3F3F3F3F3F

# --- Rollout Points ---
# Relative to the player to move when the rollout starts
WIN_POINT = 1.0
LOSE_POINT = 0.0
DRAW_POINT = 0.5

# --- Alpha-Beta ---
# Positions deeper than this are handed to the leaf evaluator
MEMO_DEPTH = 3
PLAYOUTS_PER_LEAF = 10

# --- MCTS ---
BATCH_SIZE = 1000
DEFAULT_LIMIT_MS = 200
DEFAULT_EXPANSION_THRESHOLD = 2
DEFAULT_C = 2.0
