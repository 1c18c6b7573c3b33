"""Global constants for the shuttlecup application."""

# Categories, in canonical order. Score arrays are always laid out this way.
MENS_SINGLES_1 = "Men's Singles 1"
MENS_SINGLES_2 = "Men's Singles 2"
MENS_DOUBLES_1 = "Men's Doubles 1"
MENS_DOUBLES_2 = "Men's Doubles 2"
WOMENS_SINGLES = "Women's Singles"
MIXED_DOUBLES = "Mixed Doubles"

CATEGORIES = (
    MENS_SINGLES_1,
    MENS_SINGLES_2,
    MENS_DOUBLES_1,
    MENS_DOUBLES_2,
    WOMENS_SINGLES,
    MIXED_DOUBLES,
)

CATEGORY_ABBREVIATIONS = {
    MENS_SINGLES_1: "MS",
    MENS_SINGLES_2: "RMS",
    MENS_DOUBLES_1: "MD",
    MENS_DOUBLES_2: "RMD",
    WOMENS_SINGLES: "WS",
    MIXED_DOUBLES: "XD",
}

# Scoring
MAX_CATEGORY_SCORE = 21
TIE_BREAKER_SIDE_SIZE = 3

# Pools
POOL_A = "A"
POOL_B = "B"
POOLS = (POOL_A, POOL_B)

# Knockout stage
TBD = "TBD"
SEMI_1 = "semi-1"
SEMI_2 = "semi-2"
FINAL = "final"
KNOCKOUT_IDS = (SEMI_1, SEMI_2, FINAL)
SEMI = "semi"
FINAL_TYPE = "final"

# Firestore
SEASONS_COLLECTION = "seasons"
