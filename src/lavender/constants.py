BOARD_SIZE = 8
PALETTE_SIZE = 4

# Sentinel for a cell vacated during collapse; never visible once a collapse cycle completes.
EMPTY = -1

# Shortest chain (and smallest connected region) that counts as a harvest.
MIN_CHAIN = 3

# Full-board regenerations attempted before falling back to a forced three-in-a-row.
RESHUFFLE_ATTEMPTS = 10
# Upper bound on re-roll passes while scrubbing starting matches from a fresh board.
GENERATION_PASS_LIMIT = 500

# Scoring
BASE_SCORE = 10
MAX_COMBO_MULTIPLIER = 5
COMBO_CHAIN_LENGTH = 4
MEGA_COMBO_CHAIN_LENGTH = 5

# Round timing (seconds)
ROUND_SECONDS = 60

# End-of-round rating thresholds (minimum score for each rating)
RATING_EXCELLENT = 1000
RATING_GOOD = 500
RATING_DECENT = 200

# Canonical lavender varieties: (name, hex colour)
LAVENDER_VARIETIES = (
    ("lavender", "#9370DB"),
    ("blue_lavender", "#8A2BE2"),
    ("pink_lavender", "#DDA0DD"),
    ("light_lavender", "#E6E6FA"),
)
