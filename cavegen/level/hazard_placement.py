"""
Hazard Placement - spikes on zone ground and wall turrets on zone sides.

Spikes only decorate ground tiles. Turrets occupy a floor tile against a
wall and turn it into wall, so the analyzer is re-segmented afterwards.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Set

from cavegen.config import SPIKE_RATIO, TURRET_RATIO
from .zone_analyzer import ZoneAnalyzer
from .zone_data import Location

logger = logging.getLogger(__name__)


class HazardKind(Enum):
    SPIKE = "spike"
    TURRET = "turret"


class Facing(Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Hazard:
    """A placed hazard. Turrets face away from the wall they are mounted on."""
    kind: HazardKind
    location: Location
    facing: Optional[Facing] = None


def _quota(ratio: float, tile_count: int) -> int:
    # Rounded share of the tiles
    return int(ratio * tile_count + 0.5)


def _reserved_cells(markers: Iterable[Location]) -> Set[Location]:
    """Cells of the spawn and exit alcoves, kept free of hazards."""
    reserved = set()
    for marker in markers:
        if not marker.is_defined:
            continue
        for d_row in (-2, -1, 0):
            for d_col in (-1, 0, 1):
                reserved.add(marker.offset(d_row, d_col))
    return reserved


def _pick(rng: random.Random, candidates: Set[Location], count: int) -> List[Location]:
    ordered = sorted(candidates)
    return rng.sample(ordered, min(count, len(ordered)))


def place_hazards(analyzer: ZoneAnalyzer, rng: random.Random,
                  spike_ratio: float = SPIKE_RATIO,
                  turret_ratio: float = TURRET_RATIO) -> List[Hazard]:
    """
    Place spikes and turrets across every zone of a segmented analyzer.

    Each zone gets round(spike_ratio * ground tiles) spikes on its ground,
    then round(turret_ratio * left tiles) right-facing turrets on tiles bounded
    only on the left, then the mirrored left-facing turrets. No two hazards
    share a tile and the spawn/exit alcoves stay clear. Turret tiles become
    walls and the analyzer is re-segmented when any turret was placed.

    Args:
        analyzer: Segmented analyzer, normally after spawn/exit selection
        rng: Random source for tile choice
        spike_ratio: Share of ground tiles that receive spikes
        turret_ratio: Share of left (and of right) tiles that receive turrets

    Returns:
        Placed hazards: spikes first, then right-facing and left-facing turrets
    """
    occupied = _reserved_cells(analyzer.locations)
    hazards: List[Hazard] = []

    for zone in analyzer.zones:
        count = _quota(spike_ratio, zone.num_ground_tiles)
        for location in _pick(rng, zone.ground - occupied, count):
            occupied.add(location)
            hazards.append(Hazard(HazardKind.SPIKE, location))

    turrets = []
    for facing in (Facing.RIGHT, Facing.LEFT):
        for zone in analyzer.zones:
            mounted, other = (zone.left, zone.right) if facing == Facing.RIGHT else (zone.right, zone.left)
            count = _quota(turret_ratio, len(mounted))
            for location in _pick(rng, mounted - other - occupied, count):
                occupied.add(location)
                turrets.append(Hazard(HazardKind.TURRET, location, facing))

    for turret in turrets:
        analyzer.mutate_grid(turret.location.col, turret.location.row, True)
    if turrets:
        analyzer.resegment()

    hazards.extend(turrets)
    logger.debug("Placed %d spikes and %d turrets", len(hazards) - len(turrets), len(turrets))
    return hazards
