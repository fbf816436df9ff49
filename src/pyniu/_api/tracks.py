"""Track endpoints.

Endpoints:
  - /v5/track/list/v2 (paginated)
  - /v5/track/detail
"""

from __future__ import annotations

import logging

from pyniu._api._common import execute, parse_data, validate_params
from pyniu._constants import TRACK_DETAIL_PATH, TRACK_LIST_PATH
from pyniu._transport import Transport
from pyniu.config import NiuConfig
from pyniu.errors import ErrorDescriptor
from pyniu.models.requests import TrackDetailRequest, TrackListRequest
from pyniu.models.track import TrackDetail, TrackPage
from pyniu.session import Session

_logger = logging.getLogger(__name__)


async def fetch_tracks(
    config: NiuConfig,
    session: Session,
    transport: Transport,
    sn: str,
    *,
    index: int,
    page_size: int,
) -> TrackPage | ErrorDescriptor:
    """Fetch one page of recorded rides, most recent first.

    Parameters
    ----------
    sn : str
        Vehicle serial number.
    index : int
        Zero-based page index.
    page_size : int
        Number of rides per page (at least 1).
    """
    origin = "get_tracks"
    request = validate_params(TrackListRequest, origin, sn=sn, index=index, page_size=page_size)
    if isinstance(request, ErrorDescriptor):
        return request

    response = await execute(
        TRACK_LIST_PATH,
        payload={"sn": request.sn, "index": request.index, "pagesize": request.page_size},
        config=config,
        session=session,
        transport=transport,
        origin=origin,
    )
    if isinstance(response, ErrorDescriptor):
        return response

    page = parse_data(response, TrackPage, origin)
    if isinstance(page, TrackPage):
        _logger.debug("Track page index=%d: %d item(s)", request.index, len(page.items))
    return page


async def fetch_track_detail(
    config: NiuConfig,
    session: Session,
    transport: Transport,
    sn: str,
    *,
    track_id: str,
    track_date: str,
) -> TrackDetail | ErrorDescriptor:
    """Fetch the GPS trace of a single ride.

    ``track_date`` is the ride's ``YYYYMMDD`` date as listed by
    :func:`fetch_tracks`.
    """
    origin = "get_track_detail"
    request = validate_params(TrackDetailRequest, origin, sn=sn, track_id=track_id, track_date=track_date)
    if isinstance(request, ErrorDescriptor):
        return request

    response = await execute(
        TRACK_DETAIL_PATH,
        payload={"sn": request.sn, "trackId": request.track_id, "trackDate": request.track_date},
        config=config,
        session=session,
        transport=transport,
        origin=origin,
    )
    if isinstance(response, ErrorDescriptor):
        return response
    return parse_data(response, TrackDetail, origin)
