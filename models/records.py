"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True, slots=True)
class MeasurementRecord:
    """A single scale reading parsed from the monitoring page."""

    id: str
    date: str
    timestamp: int
    weight: float
    battery: float
    temp: float

    @classmethod
    def build(
        cls, date: str, timestamp: int, weight: float, battery: float, temp: float
    ) -> "MeasurementRecord":
        """Create a record whose id is derived from its timestamp."""
        return cls(
            id=str(timestamp),
            date=date,
            timestamp=timestamp,
            weight=weight,
            battery=battery,
            temp=temp,
        )

    def to_document(self) -> Dict[str, Any]:
        return asdict(self)
