import attr
from geopy.distance import distance

from seneparking.shared.util import ensure, validate_pos


@attr.s(frozen=True)
class Location:
    latitude: float = attr.ib(converter=float, validator=attr.validators.instance_of(float))
    longitude: float = attr.ib(converter=float, validator=attr.validators.instance_of(float))

    def distance_to(self, other: 'Location') -> float:
        """Geodesic distance to another location, in meters."""
        return distance((self.latitude, self.longitude), (other.latitude, other.longitude)).meters


@attr.s(frozen=True)
class Region:
    """A visible map area: a center point and the latitude/longitude span around it."""
    center: Location = attr.ib(converter=ensure(Location), validator=attr.validators.instance_of(Location))
    latitude_delta: float = attr.ib(converter=float, validator=validate_pos)
    longitude_delta: float = attr.ib(converter=float, validator=validate_pos)

    def contains(self, location: Location) -> bool:
        return (abs(location.latitude - self.center.latitude) <= self.latitude_delta / 2 and
                abs(location.longitude - self.center.longitude) <= self.longitude_delta / 2)


# Universidad de los Andes
DEFAULT_REGION = Region(Location(4.6015, -74.0655), 0.01, 0.01)
