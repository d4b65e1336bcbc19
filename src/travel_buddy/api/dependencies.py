"""Request-scoped dependencies shared by the routers."""

from fastapi import Depends, Header, Request

from travel_buddy.containers import AppContainer
from travel_buddy.domain.models import Identity


def get_container(request: Request) -> AppContainer:
    """Return the dependency container attached to the app."""
    return request.app.state.container


def current_identity(
    authorization: str | None = Header(default=None),
    container: AppContainer = Depends(get_container),
) -> Identity:
    """Resolve the caller from the ``Authorization: Bearer`` header."""
    return container.identity_service.resolve(authorization)
