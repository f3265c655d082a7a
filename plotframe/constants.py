from __future__ import annotations

# Joins a series name and its input identifier into the dataset pool key.
NAME_GROUP_SEPARATOR = "_IN_"

# color indices
WHITE = 0
BLACK = 1
RED = 2
GREEN = 3
BLUE = 4
YELLOW = 5
MAGENTA = 6
CYAN = 7
ORANGE = 800
SPRING = 820
TEAL = 840
AZURE = 860
VIOLET = 880
PINK = 900
GRAY = 920

# marker styles
MARKER_DOT = 1
MARKER_FULL_CIRCLE = 20
MARKER_FULL_SQUARE = 21
MARKER_FULL_TRIANGLE_UP = 22
MARKER_FULL_TRIANGLE_DOWN = 23
MARKER_OPEN_CIRCLE = 24
MARKER_OPEN_SQUARE = 25
MARKER_OPEN_TRIANGLE_UP = 26
MARKER_OPEN_DIAMOND = 27
MARKER_OPEN_CROSS = 28
MARKER_FULL_STAR = 29
MARKER_OPEN_STAR = 30
MARKER_FULL_DIAMOND = 33
MARKER_FULL_CROSS = 34

# line styles
LINE_SOLID = 1
LINE_DASHED = 2
LINE_DOTTED = 3
LINE_DASH_DOTTED = 4

# fill styles
FILL_HOLLOW = 0
FILL_SOLID = 1001
FILL_TRANSPARENT = 4000

# text fonts: font code * 10 + precision, precision 3 means size in pixels
FONT_HELVETICA_PX = 43
FONT_HELVETICA_BOLD_PX = 63
FONT_COURIER_PX = 83

DEFAULT_COLORS: tuple[int, ...] = (BLACK, RED, BLUE, GREEN + 2, MAGENTA, ORANGE, AZURE, VIOLET)
DEFAULT_MARKERS: tuple[int, ...] = (
    MARKER_FULL_CIRCLE,
    MARKER_FULL_SQUARE,
    MARKER_FULL_DIAMOND,
    MARKER_FULL_CROSS,
    MARKER_OPEN_CIRCLE,
    MARKER_OPEN_SQUARE,
    MARKER_OPEN_DIAMOND,
    MARKER_OPEN_CROSS,
)
