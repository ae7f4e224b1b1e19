# platebot/schemas/vehicle.py
from pydantic import BaseModel, Field
from typing import Optional


class VehicleRecord(BaseModel):
    """Sighting information stored under CAR:<normalized plate>. Every field is optional."""
    reported_in_city: Optional[str] = None   # where the vehicle was first seen
    brand: Optional[str] = None
    color: Optional[str] = None
    comment: Optional[str] = None            # notable features
    occupant_count: Optional[int] = Field(default=None, ge=0, le=255)

    def to_bytes(self) -> bytes:
        return self.model_dump_json().encode("utf-8")

    @classmethod
    def from_bytes(cls, raw: bytes) -> "VehicleRecord":
        return cls.model_validate_json(raw)


class PartialPlateRecord(BaseModel):
    """A record known only by a fragment of its plate. Not wired into any lookup yet."""
    partial_plate: str
    record: VehicleRecord

    def matches(self, plate: str) -> bool:
        return self.partial_plate in plate
