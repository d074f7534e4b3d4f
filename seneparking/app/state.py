import logging
from typing import Callable, List, Optional, Tuple

import attr

from seneparking.shared.clients import ParkingLotsClient
from seneparking.shared.decoder import DecodeReport
from seneparking.shared.filters import filter_lots
from seneparking.shared.location import DEFAULT_REGION, Location, Region
from seneparking.shared.models import ParkingLot

logger = logging.getLogger('app')


@attr.s(frozen=True)
class MapState:
    """Read-only snapshot of everything the map screen shows."""
    lots: Tuple[ParkingLot, ...] = attr.ib(converter=tuple, default=())
    show_ev_only: bool = attr.ib(default=False)
    region: Region = attr.ib(default=DEFAULT_REGION)
    user_location: Optional[Location] = attr.ib(default=None)
    last_error: Optional[str] = attr.ib(default=None)
    last_report: Optional[DecodeReport] = attr.ib(default=None)
    generation: int = attr.ib(default=0)

    @property
    def visible_lots(self) -> List[ParkingLot]:
        return filter_lots(self.lots, self.show_ev_only)


@attr.s(frozen=True)
class FetchCompleted:
    lots: Tuple[ParkingLot, ...] = attr.ib(converter=tuple)
    report: Optional[DecodeReport] = attr.ib(default=None)


@attr.s(frozen=True)
class FetchFailed:
    error: str = attr.ib()


@attr.s(frozen=True)
class FilterToggled:
    show_ev_only: bool = attr.ib()


@attr.s(frozen=True)
class RegionChanged:
    region: Region = attr.ib()


@attr.s(frozen=True)
class LocationUpdated:
    location: Location = attr.ib()


def reduce(state: MapState, action) -> MapState:
    if isinstance(action, FetchCompleted):
        # the new collection replaces the old one, lots are never merged
        return attr.evolve(state, lots=action.lots, last_report=action.report, last_error=None,
                           generation=state.generation + 1)
    elif isinstance(action, FetchFailed):
        return attr.evolve(state, last_error=action.error)
    elif isinstance(action, FilterToggled):
        return attr.evolve(state, show_ev_only=action.show_ev_only)
    elif isinstance(action, RegionChanged):
        return attr.evolve(state, region=action.region)
    elif isinstance(action, LocationUpdated):
        return attr.evolve(state, user_location=action.location)
    else:
        raise TypeError('Unknown map action: {!r}'.format(action))


class MapController(object):
    """Owns the current MapState. The state only changes through dispatch()."""

    def __init__(self, client: Optional[ParkingLotsClient] = None, state: Optional[MapState] = None) -> None:
        self.client = client
        self._state: MapState = state if state is not None else MapState()
        self._subscribers: List[Callable[[MapState], None]] = []

    @property
    def state(self) -> MapState:
        return self._state

    def subscribe(self, callback: Callable[[MapState], None]) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)
        return unsubscribe

    def dispatch(self, action) -> MapState:
        self._state = reduce(self._state, action)
        state = self._state
        for callback in list(self._subscribers):
            try:
                callback(state)
            except Exception as e:
                logger.error("Subscriber {!r} failed on {}: '{}'".format(callback, type(action).__name__, e))
        return state

    def toggle_ev_only(self) -> MapState:
        return self.dispatch(FilterToggled(not self._state.show_ev_only))

    async def refresh(self) -> MapState:
        if self.client is None:
            raise RuntimeError('MapController has no client to refresh from')
        result = await self.client.fetch()
        if result.ok:
            return self.dispatch(FetchCompleted(result.lots, result.report))
        logger.warning("Keeping {} parking lots after failed fetch".format(len(self._state.lots)))
        return self.dispatch(FetchFailed(result.error))
