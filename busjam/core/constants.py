from __future__ import annotations

from typing import Dict, Tuple

# Cardinal directions (dcol, drow): up, right, down, left
DIRS: Tuple[Tuple[int, int], ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))

EXTRACTION_ROW = 0

EMPTY_CHAR = "."
DISABLED_CHAR = "X"
UNKNOWN_CODE = "?"

COLOR_CODES: Dict[str, str] = {
    "Red": "R",
    "Green": "G",
    "Blue": "B",
    "Yellow": "Y",
    "Purple": "P",
    "Orange": "O",
    "White": "W",
    "Black": "K",
    "Teal": "T",
    "Pink": "N",
}
CODE_COLORS: Dict[str, str] = {code: name for name, code in COLOR_CODES.items()}

SNAPSHOT_VERSION = 1

__all__ = [
    "DIRS",
    "EXTRACTION_ROW",
    "EMPTY_CHAR",
    "DISABLED_CHAR",
    "UNKNOWN_CODE",
    "COLOR_CODES",
    "CODE_COLORS",
    "SNAPSHOT_VERSION",
]
