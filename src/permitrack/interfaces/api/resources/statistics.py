"""Statistics API resource."""

import falcon
import falcon.asgi

from permitrack.application.use_cases.statistics.get_statistics import GetStatisticsUseCase
from permitrack.interfaces.api.request import actor
from permitrack.interfaces.api.serializers import statistics_to_dict


class StatisticsResource:
    """GET /statistics"""

    def __init__(self, get_statistics: GetStatisticsUseCase) -> None:
        self._get_statistics = get_statistics

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        stats = await self._get_statistics.execute(actor(req))
        resp.media = statistics_to_dict(stats)
        resp.status = falcon.HTTP_200
