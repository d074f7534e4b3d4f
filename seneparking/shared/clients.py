import logging
from typing import List, Optional

import attr
from tornado import httpclient

from seneparking.shared.decoder import DecodeReport, decode_with_report
from seneparking.shared.models import ParkingLot

DEFAULT_DOCUMENTS_URL = ('https://firestore.googleapis.com/v1/projects/seneparking-f457b'
                         '/databases/(default)/documents/parkingLots')

HEADERS = {'Accept': 'application/json'}

logger = logging.getLogger('shared client')


@attr.s(frozen=True)
class FetchResult:
    """Outcome of one fetch. lots is None when the request itself failed."""
    lots: Optional[List[ParkingLot]] = attr.ib(default=None)
    report: Optional[DecodeReport] = attr.ib(default=None)
    error: Optional[str] = attr.ib(default=None)

    @property
    def ok(self) -> bool:
        return self.lots is not None


class ParkingLotsClient(object):
    """
    An async client for the parking lots documents endpoint
    """

    def __init__(self, url: str = DEFAULT_DOCUMENTS_URL, http_client=None):
        self.url = url
        self.client = http_client if http_client is not None else httpclient.AsyncHTTPClient()

    async def fetch(self) -> FetchResult:
        request = httpclient.HTTPRequest(self.url, headers=HEADERS, method='GET')
        try:
            response = await self.client.fetch(request)
        except httpclient.HTTPClientError as e:
            logger.warning("server error while fetching parking lots from {}: {}".format(self.url, e))
            return FetchResult(error=str(e))
        except OSError as e:
            logger.warning("could not reach {} to fetch parking lots: {}".format(self.url, e))
            return FetchResult(error=str(e))

        result = decode_with_report(response.body)
        logger.info("fetched {} parking lots from {}".format(len(result.lots), self.url))
        return FetchResult(lots=result.lots, report=result.report)
