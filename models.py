from dataclasses import dataclass
from typing import Any, Dict

from utils import Point

@dataclass(frozen=True)
class FiringSolution:
    origin: Point
    target: Point
    grid_size: int
    range_m: int
    bearing_deg: int
    bearing_mrad: int

    def as_dict(self) -> Dict[str, Any]:
        return {
            "origin": self.origin.as_pair(),
            "target": self.target.as_pair(),
            "grid_size": self.grid_size,
            "range_m": self.range_m,
            "bearing_deg": self.bearing_deg,
            "bearing_mrad": self.bearing_mrad,
        }

    def describe(self) -> str:
        return (f"{self.origin.label()} -> {self.target.label()}: "
                f"{self.range_m} m, {self.bearing_deg}° / {self.bearing_mrad} mrad")
