import json
import logging
from typing import List

from tornado import web

from seneparking.shared.location import Location
from seneparking.shared.models import ParkingLot

logger = logging.getLogger('devserver')

DOCUMENTS_PATH = '/documents/parkingLots'
DOCUMENT_PREFIX = 'projects/seneparking-dev/databases/(default)/documents/parkingLots/'

SAMPLE_LOTS = [
    ParkingLot(DOCUMENT_PREFIX + '1', 'SantoDomingo building', Location(4.6020, -74.0660), 10, 2, 16000,
               '6:00 AM', '10:00 PM'),
    ParkingLot(DOCUMENT_PREFIX + '2', 'Parking Way', Location(4.6010, -74.0650), 5, 0, 24000,
               '7:00 AM', '9:00 PM'),
    ParkingLot(DOCUMENT_PREFIX + '3', 'Parqueadero Monserrate', Location(4.6000, -74.0640), 0, 0, 10000,
               '8:00 AM', '8:00 PM'),
]


def encode_document(lot: ParkingLot) -> dict:
    """Encode a lot the way the document store returns it, every value in a typed wrapper."""
    return {
        'name': lot.id,
        'fields': {
            'name': {'stringValue': lot.name},
            'latitude': {'doubleValue': lot.coordinate.latitude},
            'longitude': {'doubleValue': lot.coordinate.longitude},
            'availableSpots': {'integerValue': str(lot.available_spots)},
            'available_ev_spots': {'integerValue': str(lot.available_ev_spots)},
            'farePerDay': {'integerValue': str(lot.fare_per_day)},
            'open_time': {'stringValue': lot.open_time},
            'close_time': {'stringValue': lot.close_time},
        },
    }


class DocumentsHandler(web.RequestHandler):
    def initialize(self, lots: List[ParkingLot]) -> None:
        self.lots = lots

    def get(self):
        logger.info("Serving {} parking lot documents".format(len(self.lots)))
        self.set_header('Content-Type', 'application/json; charset=UTF-8')
        self.write(json.dumps({'documents': [encode_document(lot) for lot in self.lots]}))


def make_app(lots: List[ParkingLot] = None) -> web.Application:
    lots = list(SAMPLE_LOTS) if lots is None else lots
    return web.Application([(DOCUMENTS_PATH, DocumentsHandler, {'lots': lots})])
