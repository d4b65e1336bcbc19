"""Premium checkout endpoints."""

from fastapi import APIRouter, Depends

from travel_buddy.api.dependencies import current_identity, get_container
from travel_buddy.api.schemas import CheckoutRequest, VerifySessionRequest
from travel_buddy.containers import AppContainer
from travel_buddy.domain.models import Identity

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.post("/create-checkout-session")
async def create_checkout_session(
    body: CheckoutRequest,
    actor: Identity = Depends(current_identity),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    session = await container.payment_service.create_checkout(actor, body.plan)
    return {"session_id": session.id, "url": session.url}


@router.post("/verify-session")
async def verify_session(
    body: VerifySessionRequest,
    actor: Identity = Depends(current_identity),
    container: AppContainer = Depends(get_container),
) -> dict[str, bool]:
    paid = await container.payment_service.verify_checkout(actor, body.session_id)
    return {"paid": paid}
