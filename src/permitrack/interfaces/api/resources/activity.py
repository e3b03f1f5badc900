"""Activity log API resources."""

import falcon
import falcon.asgi

from permitrack.application.dto.activity_dto import DEFAULT_PAGE_SIZE, ActivityQuery
from permitrack.application.use_cases.activity.query_activity import (
    ListActivityActionsUseCase,
    ListActivityUseCase,
)
from permitrack.application.validation import parse_date
from permitrack.interfaces.api.request import actor
from permitrack.interfaces.api.serializers import activity_to_dict


class ActivityResource:
    """GET /activity and GET /activity/actions"""

    def __init__(
        self, list_activity: ListActivityUseCase, list_actions: ListActivityActionsUseCase
    ) -> None:
        self._list_activity = list_activity
        self._list_actions = list_actions

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Query params: search, action, date, limit, offset."""
        date_param = req.get_param("date")
        query = ActivityQuery(
            search=req.get_param("search"),
            action=req.get_param("action") or None,
            date=parse_date(date_param) if date_param else None,
            limit=req.get_param_as_int("limit") or DEFAULT_PAGE_SIZE,
            offset=req.get_param_as_int("offset") or 0,
        )
        page = await self._list_activity.execute(actor(req), query)
        resp.media = {
            "activities": [activity_to_dict(e) for e in page.entries],
            "total": page.total,
            "limit": page.limit,
            "offset": page.offset,
        }
        resp.status = falcon.HTTP_200

    async def on_get_actions(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        resp.media = {"actions": await self._list_actions.execute(actor(req))}
        resp.status = falcon.HTTP_200
