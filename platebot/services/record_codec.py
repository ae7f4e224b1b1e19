# platebot/services/record_codec.py
"""
Renders a VehicleRecord as the six-line text shown to users, and parses that
same text back into a record when an admin sends it in.

Both directions are built from RECORD_LINES, so a rendered record can always be
copied, edited, and pasted back as an admin submission:

    Номерний знак: BT5527CM
    Авто: Renault Trafic
    Колір авто: Білий
    Особливості: ?
    Чисельність ДРГ: ?
    Місто де вперше було зафіксовано: Херсон

A "?" value means the field is absent.
"""

import re
from typing import Optional, Tuple

from platebot.schemas.vehicle import VehicleRecord
from platebot.services.plate_normalizer import normalize_plate

PLACEHOLDER = "?"
MAX_OCCUPANT_COUNT = 255

# (capture group / record field, label, value pattern) in display order
RECORD_LINES = (
    ("plate",            "Номерний знак",                     r"[^\n]+"),
    ("brand",            "Авто",                              r"[^\n]+"),
    ("color",            "Колір авто",                        r"[^\n]+"),
    ("comment",          "Особливості",                       r"[^\n]+"),
    ("occupant_count",   "Чисельність ДРГ",                   r"\d+|\?"),
    ("reported_in_city", "Місто де вперше було зафіксовано",  r"[^\n]+"),
)

RECORD_PATTERN = re.compile(
    r"\s+".join(
        f"{re.escape(label)}: (?P<{name}>{value})" for name, label, value in RECORD_LINES
    )
)


class RecordParseError(ValueError):
    """Text does not follow the six-line record layout."""


class OccupantCountError(ValueError):
    """Occupant count is all digits but does not fit in 0..255."""


def _display(value) -> str:
    return PLACEHOLDER if value is None else str(value)


def render_record(record: VehicleRecord, plate: str) -> str:
    values = record.model_dump()
    values["plate"] = plate
    return "\n".join(f"{label}: {_display(values[name])}" for name, label, _ in RECORD_LINES)


def _optional(value: str) -> Optional[str]:
    return None if value == PLACEHOLDER else value


def _occupant_count(value: str) -> Optional[int]:
    if value == PLACEHOLDER:
        return None
    count = int(value)
    if count > MAX_OCCUPANT_COUNT:
        raise OccupantCountError(f"Occupant count {count} exceeds {MAX_OCCUPANT_COUNT}")
    return count


def parse_record(text: str) -> Tuple[str, VehicleRecord]:
    """
    Parse a rendered record. Returns (normalized plate, record).
    Raises RecordParseError if the six labelled lines are not all present in order.
    """
    match = RECORD_PATTERN.search(text)
    if not match:
        raise RecordParseError("Text does not match the record layout")

    record = VehicleRecord(
        brand=_optional(match["brand"]),
        color=_optional(match["color"]),
        comment=_optional(match["comment"]),
        occupant_count=_occupant_count(match["occupant_count"]),
        reported_in_city=_optional(match["reported_in_city"]),
    )
    return normalize_plate(match["plate"]), record
