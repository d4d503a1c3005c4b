from fastapi import Query, Request

from lawdesk.core.config import settings
from lawdesk.services import Services


def get_services(request: Request) -> Services:
    return request.app.state.services


class PageParams:
    """``page``/``limit`` query parameters shared by every list endpoint."""

    def __init__(
        self,
        page: int = Query(1, ge=1, description="1-based page number"),
        limit: int = Query(
            settings.DEFAULT_PAGE_SIZE,
            ge=1,
            le=settings.MAX_PAGE_SIZE,
            description="Records per page",
        ),
    ):
        self.page = page
        self.limit = limit
