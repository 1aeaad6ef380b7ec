import logging
import math
import numbers
from typing import Optional, Tuple

from config import DEFAULT_GRID_SIZE_M
from utils import Point, round_half_away, rad_to_deg, rad_to_mrad
from models import FiringSolution

logger = logging.getLogger(__name__)


class InvalidConfiguration(ValueError):
    """Grid size is not a positive integer."""


class NoTarget(LookupError):
    """A range or bearing was requested before a target was set."""


class Solver:
    """
    Range and bearing from an origin to a target on a square grid.

    Coordinates are grid units; ``grid_size`` is the number of meters one unit
    covers. Bearings are compass bearings: 0 is north (+y), angles grow
    clockwise, so east (+x) is pi/2. Integer results are rounded to nearest,
    ties away from zero. A rounded bearing of 360° (or 6283 mrad) is returned
    as-is and not wrapped to 0.

    A solver is not thread-safe; callers sharing one must serialize access.
    """

    def __init__(self, origin: Point, grid_size: int = DEFAULT_GRID_SIZE_M):
        self._origin = origin
        self._target: Optional[Point] = None
        self._grid_size = DEFAULT_GRID_SIZE_M
        self.set_grid_size(grid_size)

    # --- state ---

    @property
    def grid_size(self) -> int:
        return self._grid_size

    @property
    def origin(self) -> Point:
        return self._origin

    @property
    def target(self) -> Optional[Point]:
        """The target point, or None while no target is set."""
        return self._target

    def set_grid_size(self, grid_size: int) -> None:
        if isinstance(grid_size, bool) or not isinstance(grid_size, numbers.Integral) or grid_size <= 0:
            logger.warning("Rejected grid size %r", grid_size)
            raise InvalidConfiguration(f"Grid size must be a positive integer, got {grid_size!r}.")
        self._grid_size = int(grid_size)
        logger.debug("Grid size set to %d m", self._grid_size)

    def set_origin(self, origin: Point) -> None:
        self._origin = origin
        logger.debug("Origin set to %s", origin.label())

    def set_target(self, target: Point) -> None:
        self._target = target
        logger.debug("Target set to %s", target.label())

    # --- computation ---

    def _deltas(self) -> Tuple[int, int]:
        if self._target is None:
            raise NoTarget("No target set; call set_target() first.")
        return self._target.x - self._origin.x, self._target.y - self._origin.y

    def _hypotenuse(self) -> float:
        dx, dy = self._deltas()
        return math.sqrt(dx * dx + dy * dy)

    def calculate_range(self) -> int:
        """Straight-line distance to the target in meters."""
        return round_half_away(self._hypotenuse() * self._grid_size)

    def bearing_rad(self) -> float:
        """Bearing to the target in radians, in [0, 2*pi)."""
        dx, dy = self._deltas()
        if dx == 0:
            # Target on the origin counts as due north.
            return math.pi if dy < 0 else 0.0
        if dy == 0:
            return math.pi / 2 if dx > 0 else 3 * math.pi / 2

        # Law of cosines on the triangle formed by the north ray, the line of
        # fire and the x offset. Rounding can push the cosine just past +-1.
        h = self._hypotenuse()
        cos_angle = (dx * dx - h * h - dy * dy) / (-2.0 * h * dy)
        cos_angle = max(-1.0, min(1.0, cos_angle))
        angle = math.acos(cos_angle)
        if dx < 0:
            angle = 2 * math.pi - angle
        return angle

    def calculate_bearing_deg(self) -> int:
        return rad_to_deg(self.bearing_rad())

    def calculate_bearing_mrad(self) -> int:
        return rad_to_mrad(self.bearing_rad())

    def solve(self) -> FiringSolution:
        rad = self.bearing_rad()
        return FiringSolution(
            origin=self._origin,
            target=self._target,
            grid_size=self._grid_size,
            range_m=self.calculate_range(),
            bearing_deg=rad_to_deg(rad),
            bearing_mrad=rad_to_mrad(rad),
        )
