# platebot/services/plate_normalizer.py
"""
License plate normalization. The result is the CAR:<plate> storage key suffix,
so the substitution table must not change or existing records become unreachable.

Steps:
  1. Upper-case
  2. Map Cyrillic letters that look like Latin ones onto the Latin letter
  3. Drop everything that is not a letter or a digit
"""

# Cyrillic → Latin homoglyphs (upper-case only, applied after upper())
CYRILLIC_TO_LATIN = str.maketrans({
    "А": "A",
    "В": "B",
    "Е": "E",
    "К": "K",
    "М": "M",
    "І": "I",
    "Н": "H",
    "О": "O",
    "Р": "P",
    "С": "C",
    "Т": "T",
    "У": "Y",
    "Х": "X",
})


def normalize_plate(raw_plate: str) -> str:
    """
    >>> normalize_plate("вт 12-34 см")
    'BT1234CM'
    >>> normalize_plate("вт 12-34 cm")
    'BT1234CM'
    """
    plate = raw_plate.upper().translate(CYRILLIC_TO_LATIN)
    return "".join(ch for ch in plate if ch.isalnum())
