from typing import List, Optional, Tuple

import attr

from seneparking.app.state import MapState
from seneparking.shared.filters import sort_by_distance
from seneparking.shared.location import Location
from seneparking.shared.models import LotStatus, ParkingLot

LEGEND: List[Tuple[str, str]] = [(status.label, status.color) for status in LotStatus]


@attr.s(frozen=True)
class Marker:
    lot: ParkingLot = attr.ib()
    distance: Optional[float] = attr.ib(default=None)  # in meters

    @property
    def lot_id(self) -> str:
        return self.lot.id

    @property
    def location(self) -> Location:
        return self.lot.coordinate

    @property
    def status(self) -> LotStatus:
        return self.lot.status

    @property
    def color(self) -> str:
        return self.status.color


def markers_for(state: MapState) -> List[Marker]:
    """Markers for the visible lots inside the map region, nearest first when the user's location is known."""
    lots = [lot for lot in state.visible_lots if state.region.contains(lot.coordinate)]
    if state.user_location is None:
        return [Marker(lot) for lot in lots]
    return [Marker(lot, dist) for lot, dist in sort_by_distance(lots, state.user_location)]
