"""Product policy constants.

Every value here is a tuning knob rather than a derived quantity; callers can
override each one through the matching keyword argument.
"""

# ============================================================================
# BOARD DIMENSIONS
# ============================================================================
MIN_BOARD_SIZE = 5
MAX_BOARD_SIZE = 20
DEFAULT_ROWS = 10
DEFAULT_COLS = 10


# ============================================================================
# INACTIVE SQUARES
# ============================================================================
DEFAULT_MIN_INACTIVE_RATIO = 0.17
DEFAULT_MAX_INACTIVE_RATIO = 0.19
MAX_CUSTOM_INACTIVE_PERCENTAGE = 90


# ============================================================================
# FAIRNESS SEARCH
# ============================================================================
FAIRNESS_MAX_ATTEMPTS = 40
FAIRNESS_ACCEPTABLE_DIFF = 1


# ============================================================================
# LAYOUT MASKS
# ============================================================================
# Packed coordinate key is row * MASK_STRIDE + col.
MASK_STRIDE = 64


# ============================================================================
# CAMPAIGN PERSISTENCE
# ============================================================================
CAMPAIGN_STORAGE_KEY = "squart:story-progress:v1"
CAMPAIGN_SAVE_VERSION = 1
