import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, status

from stat_relay.core import schemas
from stat_relay.core.errors import InvalidRequestError
from stat_relay.core.frames import build_frames
from stat_relay.core.upstream import StatsClient, get_stats_client

router = APIRouter(tags=["Frames"])

logger = logging.getLogger(__name__)

stats_dep = Annotated[StatsClient, Depends(get_stats_client)]


@router.get(
    "/",
    response_model=schemas.FramesResponse,
    status_code=status.HTTP_200_OK,
)
async def get_frames(stats: stats_dep, mid: Optional[str] = None):
    """
    Return the display frames for one user:
    followers -> archive views -> static frame.

    Any failure is answered by the error envelope (still HTTP 200).
    """
    mid = (mid or "").strip()
    if not mid:
        logger.warning("mid empty")
        raise InvalidRequestError("mid empty")

    # The second call only runs once the first one succeeded
    relation = await stats.fetch_relation_stat(mid)
    upstat = await stats.fetch_up_stat(mid)

    logger.info(f"Stats for mid={mid}: {relation.data} {upstat.data}")

    return schemas.FramesResponse(frames=build_frames(relation.data, upstat.data))
