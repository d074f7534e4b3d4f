from typing import Iterable, List, Tuple

from seneparking.shared.location import Location
from seneparking.shared.models import ParkingLot


def filter_lots(lots: Iterable[ParkingLot], show_ev_only: bool) -> List[ParkingLot]:
    if not show_ev_only:
        return list(lots)
    return [lot for lot in lots if lot.available_ev_spots > 0]


def sort_by_distance(lots: Iterable[ParkingLot], origin: Location) -> List[Tuple[ParkingLot, float]]:
    """Pair each lot with its distance in meters from origin, nearest first."""
    with_distance = [(lot, origin.distance_to(lot.coordinate)) for lot in lots]
    with_distance.sort(key=lambda pair: pair[1])
    return with_distance
