"""Join request endpoints."""

from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, status

from travel_buddy.api.dependencies import current_identity, get_container
from travel_buddy.api.schemas import (
    CreateJoinRequest,
    RespondJoinRequest,
    serialize_request,
)
from travel_buddy.containers import AppContainer
from travel_buddy.domain.join_requests import JoinRequest
from travel_buddy.domain.models import Identity

router = APIRouter(prefix="/api/join-requests", tags=["join-requests"])


def _listing(requests: list[JoinRequest]) -> dict[str, object]:
    return {"requests": [serialize_request(request) for request in requests]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_request(
    body: CreateJoinRequest,
    actor: Identity = Depends(current_identity),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Ask to join a travel plan."""
    request = await container.join_request_service.create_request(
        actor, body.travel_plan_id, body.message
    )
    return serialize_request(request)


@router.get("")
async def list_all_requests(
    actor: Identity = Depends(current_identity),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Every request, admins only."""
    return _listing(container.join_request_service.list_all(actor))


@router.get("/my-requests")
async def list_my_requests(
    actor: Identity = Depends(current_identity),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Requests the caller submitted."""
    return _listing(container.join_request_service.list_mine(actor))


@router.get("/received")
async def list_received_requests(
    actor: Identity = Depends(current_identity),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Requests for plans the caller owns."""
    return _listing(container.join_request_service.list_received(actor))


@router.get("/plan/{plan_id}")
async def list_plan_requests(
    plan_id: UUID,
    actor: Identity = Depends(current_identity),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Requests for one plan, owner or admin only."""
    return _listing(container.join_request_service.list_for_plan(actor, plan_id))


@router.put("/{request_id}")
async def respond_to_request(
    request_id: UUID,
    body: RespondJoinRequest,
    actor: Identity = Depends(current_identity),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Approve or reject a pending request."""
    request = await container.join_request_service.respond(
        actor, request_id, body.status
    )
    return serialize_request(request)


@router.delete("/{request_id}")
async def delete_request(
    request_id: UUID,
    actor: Identity = Depends(current_identity),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Withdraw a request, or remove one as an admin."""
    container.join_request_service.delete_request(actor, request_id)
    return {"message": "Request deleted"}
