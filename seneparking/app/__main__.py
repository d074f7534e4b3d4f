import argparse
import logging
import sys

from tornado import ioloop

from seneparking.app.markers import LEGEND, Marker, markers_for
from seneparking.app.state import FilterToggled, LocationUpdated, MapController, MapState, RegionChanged
from seneparking.shared.clients import DEFAULT_DOCUMENTS_URL, ParkingLotsClient
from seneparking.shared.location import DEFAULT_REGION, Location, Region


def format_marker(marker: Marker) -> str:
    lot = marker.lot
    line = '{:<28} {:<6} spots: {:>3}  ev: {:>3}  fare/day: {:>7}  {} - {}'.format(
        lot.name, marker.color, lot.available_spots, lot.available_ev_spots,
        lot.fare_per_day, lot.open_time, lot.close_time)
    if marker.distance is not None:
        line += '  ({:.0f} m)'.format(marker.distance)
    return line


def render(state: MapState, out=sys.stdout) -> None:
    print('Find your parking spot', file=out)
    for label, color in LEGEND:
        print('  {:<6} {}'.format(color, label), file=out)
    if state.last_error is not None:
        print('Could not load parking lots: {}'.format(state.last_error), file=out)

    markers = markers_for(state)
    for marker in markers:
        print(format_marker(marker), file=out)
    print('{} of {} lots shown{}'.format(len(markers), len(state.lots),
                                         ' (EV only)' if state.show_ev_only else ''), file=out)


async def load(url: str, ev_only: bool = False, location: Location = None) -> MapState:
    controller = MapController(ParkingLotsClient(url))
    controller.dispatch(FilterToggled(ev_only))
    if location is not None:
        controller.dispatch(LocationUpdated(location))
        controller.dispatch(RegionChanged(Region(location, DEFAULT_REGION.latitude_delta,
                                                 DEFAULT_REGION.longitude_delta)))
    return await controller.refresh()


def main(url: str, ev_only: bool = False, location: Location = None) -> int:
    state = ioloop.IOLoop.current().run_sync(lambda: load(url, ev_only, location))
    render(state)
    return 1 if state.last_error is not None else 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description='Nearby parking lots.')
    parser.add_argument("url", default=DEFAULT_DOCUMENTS_URL, nargs='?', help="Parking lots documents URL")
    parser.add_argument("--ev-only", action='store_true', help="Only show lots with available EV spots")
    parser.add_argument("--lat", type=float, help="Your latitude")
    parser.add_argument("--lon", type=float, help="Your longitude")
    parser.add_argument("--log-level", default='WARNING', help="Logging level")
    args: argparse.Namespace = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper())
    if (args.lat is None) != (args.lon is None):
        parser.error('--lat and --lon must be given together')
    user_location = Location(args.lat, args.lon) if args.lat is not None else None

    sys.exit(main(args.url, ev_only=args.ev_only, location=user_location))
