import copy
import json

import pytest
import pytest_asyncio
from tornado.httpserver import HTTPServer
from tornado.testing import bind_unused_port

from devserver.docserver import DOCUMENTS_PATH, SAMPLE_LOTS, make_app

LOT_A_DOCUMENT = {
    'name': 'd1',
    'fields': {
        'name': {'stringValue': 'Lot A'},
        'latitude': {'doubleValue': 4.6},
        'longitude': {'doubleValue': -74.06},
        'availableSpots': {'integerValue': '3'},
        'available_ev_spots': {'integerValue': '1'},
        'farePerDay': {'integerValue': '16000'},
        'open_time': {'stringValue': '6:00 AM'},
        'close_time': {'stringValue': '10:00 PM'},
    },
}


@pytest.fixture
def lot_document():
    return copy.deepcopy(LOT_A_DOCUMENT)


@pytest.fixture
def make_body():
    def build(*documents):
        return json.dumps({'documents': list(documents)}).encode('utf-8')
    return build


@pytest_asyncio.fixture
async def docserver():
    """A running document server. Yields (url, lots); changing lots changes what the server returns."""
    lots = list(SAMPLE_LOTS)
    sock, port = bind_unused_port()
    server = HTTPServer(make_app(lots))
    server.add_sockets([sock])
    yield 'http://127.0.0.1:{}{}'.format(port, DOCUMENTS_PATH), lots
    server.stop()
