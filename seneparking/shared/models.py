from enum import Enum

import attr

from seneparking.shared.location import Location
from seneparking.shared.util import ensure, validate_non_neg, enforce_type

NOT_AVAILABLE = 'N/A'


class LotStatus(Enum):
    """Availability of a lot, in the order a marker color is chosen."""
    EV_AVAILABLE = ('blue', 'Available EV spots')
    AVAILABLE = ('green', 'Available spots')
    FULL = ('red', 'Full')

    def __init__(self, color: str, label: str) -> None:
        self.color = color
        self.label = label


def lot_status(available_spots: int, available_ev_spots: int) -> LotStatus:
    if available_ev_spots > 0:
        return LotStatus.EV_AVAILABLE
    elif available_spots > 0:
        return LotStatus.AVAILABLE
    else:
        return LotStatus.FULL


@attr.s(frozen=True)
class ParkingLot:
    id: str = attr.ib(validator=enforce_type)
    name: str = attr.ib(validator=enforce_type)
    coordinate: Location = attr.ib(converter=ensure(Location), validator=attr.validators.instance_of(Location))
    available_spots: int = attr.ib(validator=[enforce_type, validate_non_neg], default=0)
    available_ev_spots: int = attr.ib(validator=[enforce_type, validate_non_neg], default=0)
    fare_per_day: int = attr.ib(validator=[enforce_type, validate_non_neg], default=0)  # smallest currency unit
    open_time: str = attr.ib(validator=enforce_type, default=NOT_AVAILABLE)
    close_time: str = attr.ib(validator=enforce_type, default=NOT_AVAILABLE)

    @property
    def status(self) -> LotStatus:
        return lot_status(self.available_spots, self.available_ev_spots)

    @property
    def marker_color(self) -> str:
        return self.status.color
