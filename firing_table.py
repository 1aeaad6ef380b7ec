import logging
import math
from typing import Dict, List

import numpy as np

from config import DEFAULT_GRID_SIZE_M, MRAD_PER_RAD
from models import FiringSolution
from solver import NoTarget, Solver
from utils import Point

logger = logging.getLogger(__name__)


def _round_half_away(a: np.ndarray) -> np.ndarray:
    return (np.sign(a) * np.floor(np.abs(a) + 0.5)).astype(np.int64)


class FiringTable:
    """Solutions from one origin to a set of named targets, computed as arrays."""

    def __init__(self, origin: Point, grid_size: int = DEFAULT_GRID_SIZE_M):
        # Solver owns origin and grid size validation.
        self._solver = Solver(origin, grid_size)
        self._targets: Dict[str, Point] = {}

    @property
    def origin(self) -> Point:
        return self._solver.origin

    @property
    def grid_size(self) -> int:
        return self._solver.grid_size

    def set_grid_size(self, grid_size: int):
        self._solver.set_grid_size(grid_size)

    def set_origin(self, origin: Point):
        self._solver.set_origin(origin)

    def add_target(self, name: str, point: Point):
        name = (name or "").strip()
        if not name:
            raise ValueError("target name required")
        self._targets[name] = point
        logger.debug("Table target %s at %s", name, point.label())

    def remove_target(self, name: str):
        del self._targets[name]

    def names(self) -> List[str]:
        return list(self._targets.keys())

    def __len__(self):
        return len(self._targets)

    def _deltas(self):
        if not self._targets:
            raise NoTarget("Firing table has no targets.")
        pts = np.array([(p.x, p.y) for p in self._targets.values()], dtype=np.int64)
        o = self._solver.origin
        return pts[:, 0] - o.x, pts[:, 1] - o.y

    def _bearings_rad(self) -> np.ndarray:
        dx, dy = self._deltas()
        h = np.sqrt((dx * dx + dy * dy).astype(float))
        with np.errstate(divide="ignore", invalid="ignore"):
            cos_angle = (dx * dx - h * h - dy * dy) / (-2.0 * h * dy)
        cos_angle = np.clip(np.nan_to_num(cos_angle), -1.0, 1.0)
        angle = np.arccos(cos_angle)
        angle = np.where(dx < 0, 2 * math.pi - angle, angle)
        # Axis-aligned targets, and a target on the origin, take the fixed bearings.
        angle = np.where(dy == 0, np.where(dx > 0, math.pi / 2, 3 * math.pi / 2), angle)
        angle = np.where(dx == 0, np.where(dy < 0, math.pi, 0.0), angle)
        return angle

    def ranges(self) -> np.ndarray:
        dx, dy = self._deltas()
        h = np.sqrt((dx * dx + dy * dy).astype(float))
        return _round_half_away(h * self._solver.grid_size)

    def bearings_deg(self) -> np.ndarray:
        return _round_half_away(self._bearings_rad() * 180.0 / math.pi)

    def bearings_mrad(self) -> np.ndarray:
        return _round_half_away(self._bearings_rad() * MRAD_PER_RAD)

    def nearest_to_range(self, range_m: float) -> str:
        ranges = self.ranges()
        idx = int(np.argmin(np.abs(ranges - float(range_m))))
        return self.names()[idx]

    def solutions(self) -> List[FiringSolution]:
        if not self._targets:
            raise NoTarget("Firing table has no targets.")
        out = []
        solver = Solver(self._solver.origin, self._solver.grid_size)
        for p in self._targets.values():
            solver.set_target(p)
            out.append(solver.solve())
        return out
