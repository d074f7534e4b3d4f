import pytest

from devserver.docserver import SAMPLE_LOTS
from seneparking.app.state import (FetchCompleted, FetchFailed, FilterToggled, LocationUpdated, MapController,
                                   MapState, RegionChanged, reduce)
from seneparking.shared.clients import FetchResult, ParkingLotsClient
from seneparking.shared.location import DEFAULT_REGION, Location, Region
from seneparking.shared.models import ParkingLot


def test_initial_state():
    state = MapState()
    assert state.lots == ()
    assert state.show_ev_only is False
    assert state.region == DEFAULT_REGION
    assert state.user_location is None
    assert state.generation == 0


def test_fetch_completed_replaces_lots():
    state = reduce(MapState(), FetchCompleted(SAMPLE_LOTS))
    assert state.lots == tuple(SAMPLE_LOTS)
    state = reduce(state, FetchCompleted(SAMPLE_LOTS[2:]))
    assert state.lots == (SAMPLE_LOTS[2],)
    assert state.generation == 2


def test_fetch_completed_clears_error():
    state = reduce(MapState(last_error='boom'), FetchCompleted([]))
    assert state.last_error is None


def test_fetch_failed_keeps_lots():
    before = reduce(MapState(), FetchCompleted(SAMPLE_LOTS))
    after = reduce(before, FetchFailed('Connection refused'))
    assert after.lots == before.lots
    assert after.last_error == 'Connection refused'
    assert after.generation == before.generation


def test_filter_toggled():
    state = reduce(MapState(lots=SAMPLE_LOTS), FilterToggled(True))
    assert state.visible_lots == [SAMPLE_LOTS[0]]
    state = reduce(state, FilterToggled(False))
    assert state.visible_lots == SAMPLE_LOTS


def test_region_and_location():
    region = Region(Location(1.0, 1.0), 0.1, 0.1)
    state = reduce(MapState(), RegionChanged(region))
    state = reduce(state, LocationUpdated(Location(1.0, 1.01)))
    assert state.region == region
    assert state.user_location == Location(1.0, 1.01)


def test_unknown_action():
    with pytest.raises(TypeError):
        reduce(MapState(), 'refresh')


def test_reduce_does_not_mutate():
    state = MapState()
    reduce(state, FilterToggled(True))
    assert state.show_ev_only is False


def test_subscribers_get_snapshots():
    controller = MapController()
    seen = []
    controller.subscribe(seen.append)
    controller.dispatch(FetchCompleted(SAMPLE_LOTS))
    controller.toggle_ev_only()
    assert [s.show_ev_only for s in seen] == [False, True]
    assert seen[-1] is controller.state
    assert seen[0].lots == seen[1].lots


def test_unsubscribe():
    controller = MapController()
    seen = []
    unsubscribe = controller.subscribe(seen.append)
    controller.toggle_ev_only()
    unsubscribe()
    unsubscribe()
    controller.toggle_ev_only()
    assert len(seen) == 1


def test_failing_subscriber_does_not_block_others(caplog):
    controller = MapController()
    seen = []

    def broken(state):
        raise RuntimeError('render failed')

    controller.subscribe(broken)
    controller.subscribe(seen.append)
    controller.toggle_ev_only()
    assert len(seen) == 1
    assert controller.state.show_ev_only
    assert 'render failed' in caplog.text


class FakeClient(ParkingLotsClient):
    def __init__(self, results):
        self.results = list(results)

    async def fetch(self):
        return self.results.pop(0)


@pytest.mark.asyncio
async def test_refresh_success_then_failure():
    lot = ParkingLot('d1', 'Lot A', Location(4.6, -74.06), 3, 1)
    controller = MapController(FakeClient([FetchResult(lots=[lot]), FetchResult(error='timeout')]))

    state = await controller.refresh()
    assert state.lots == (lot,)
    assert state.last_error is None

    state = await controller.refresh()
    assert state.lots == (lot,)
    assert state.last_error == 'timeout'


@pytest.mark.asyncio
async def test_refresh_last_write_wins():
    first = ParkingLot('d1', 'first', Location(0.0, 0.0))
    second = ParkingLot('d2', 'second', Location(0.0, 0.0))
    controller = MapController(FakeClient([FetchResult(lots=[first]), FetchResult(lots=[second])]))
    await controller.refresh()
    await controller.refresh()
    assert controller.state.lots == (second,)


@pytest.mark.asyncio
async def test_refresh_without_client():
    with pytest.raises(RuntimeError):
        await MapController().refresh()


@pytest.mark.asyncio
async def test_refresh_from_docserver(docserver):
    url, lots = docserver
    controller = MapController(ParkingLotsClient(url))
    await controller.refresh()
    assert controller.state.lots == tuple(SAMPLE_LOTS)

    del lots[0]
    await controller.refresh()
    assert controller.state.lots == tuple(SAMPLE_LOTS[1:])
    assert controller.state.last_report.total == 2
