import httpx
from fastapi import Request

from app.settings import Settings, settings


def create_client(settings_obj: Settings = settings) -> httpx.AsyncClient:
    """
    Build the shared HTTP client used for every Prismic request.
    Opened once in the app lifespan and closed on shutdown.
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings_obj.HTTP_TIMEOUT_SECONDS),
        headers={"Accept": "application/json"},
        follow_redirects=True,
    )


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client
