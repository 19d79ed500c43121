BOARD_SIZE = 15
CENTER = BOARD_SIZE // 2
RACK_SIZE = 7
BINGO_BONUS = 50
MAX_CONSECUTIVE_SCORELESS_TURNS = 6
MAX_AI_CANDIDATES = 20000

BLANK = '?'
ALPHABET = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ'

LETTER_SCORES = {
    'A': 1, 'B': 3, 'C': 3, 'D': 2, 'E': 1, 'F': 4, 'G': 2, 'H': 4, 'I': 1, 'J': 8,
    'K': 5, 'L': 1, 'M': 3, 'N': 1, 'O': 1, 'P': 3, 'Q': 10, 'R': 1, 'S': 1, 'T': 1,
    'U': 1, 'V': 4, 'W': 4, 'X': 8, 'Y': 4, 'Z': 10, BLANK: 0,
}

TILE_DISTRIBUTION = {
    'A': 9, 'B': 2, 'C': 2, 'D': 4, 'E': 12, 'F': 2, 'G': 3, 'H': 2, 'I': 9, 'J': 1, 'K': 1, 'L': 4, 'M': 2,
    'N': 6, 'O': 8, 'P': 2, 'Q': 1, 'R': 6, 'S': 4, 'T': 6, 'U': 4, 'V': 2, 'W': 2, 'X': 1, 'Y': 2, 'Z': 1, BLANK: 2
}

TOTAL_TILES = sum(TILE_DISTRIBUTION.values())  # 100

LETTER_MULTIPLIERS = {'DL': 2, 'TL': 3}
WORD_MULTIPLIERS = {'DW': 2, 'TW': 3}

# Top-left quadrant coordinates, mirrored onto the other three.
TW_COORDS = [(0, 0), (0, 7), (7, 0)]
DW_COORDS = [(r, r) for r in range(1, 5)] + \
    [(r, BOARD_SIZE - 1 - r) for r in range(1, 5)]
TL_COORDS = [(1, 5), (1, 9), (5, 1), (5, 5), (5, 9), (5, 13)]
DL_COORDS = [
    (0, 3), (0, 11), (2, 6), (2, 8), (3, 0), (3, 7), (3, 14),
    (6, 2), (6, 6), (6, 8), (6, 12), (7, 3), (7, 11)
]

MINIMAL_WORD_SET = {"QI", "ZA", "CAT", "DOG", "JO", "AX", "EX",
                    "OX", "XI", "XU", "WORD", "PLAY", "GAME", "TILE", "TURN"}

MIN_PLAYERS = 2
MAX_PLAYERS = 4
