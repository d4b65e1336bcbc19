"""Travel plan endpoints."""

from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from travel_buddy.api.dependencies import current_identity, get_container
from travel_buddy.api.schemas import (
    CreatePlanRequest,
    UpdatePlanRequest,
    serialize_plan,
)
from travel_buddy.containers import AppContainer
from travel_buddy.domain.models import Identity
from travel_buddy.services.travel_plans import UploadedImage

router = APIRouter(prefix="/api/travel-plans", tags=["travel-plans"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_plan(
    body: CreatePlanRequest,
    actor: Identity = Depends(current_identity),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Publish a new travel plan."""
    plan = container.travel_plan_service.create_plan(
        actor, body.model_dump(exclude_unset=True)
    )
    return serialize_plan(plan)


@router.get("")
async def list_plans(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Browse every plan."""
    plans = container.travel_plan_service.list_plans()
    return {"plans": [serialize_plan(plan) for plan in plans]}


@router.get("/my-plans")
async def list_my_plans(
    actor: Identity = Depends(current_identity),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Plans owned by the caller."""
    plans = container.travel_plan_service.list_my_plans(actor)
    return {"plans": [serialize_plan(plan) for plan in plans]}


@router.get("/search")
async def search_plans(  # noqa: PLR0913
    destination: str | None = Query(default=None),
    travel_type: str | None = Query(default=None, alias="travelType"),
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    interests: str | None = Query(default=None),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Public plan search."""
    plans = container.travel_plan_service.search(
        {
            "destination": destination,
            "travel_type": travel_type,
            "start_date": start_date,
            "end_date": end_date,
            "interests": interests,
        }
    )
    return {"plans": [serialize_plan(plan) for plan in plans]}


@router.get("/{plan_id}")
async def get_plan(
    plan_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Return a single plan."""
    return serialize_plan(container.travel_plan_service.get_plan(plan_id))


@router.put("/{plan_id}")
async def update_plan(
    plan_id: UUID,
    body: UpdatePlanRequest,
    actor: Identity = Depends(current_identity),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Edit a plan owned by the caller."""
    plan = container.travel_plan_service.update_plan(
        actor, plan_id, body.model_dump(exclude_unset=True)
    )
    return serialize_plan(plan)


@router.post("/{plan_id}/images")
async def upload_images(
    plan_id: UUID,
    images: list[UploadFile] = File(...),
    actor: Identity = Depends(current_identity),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Attach uploaded images to a plan."""
    uploads = [
        UploadedImage(
            filename=image.filename or "image",
            content=await image.read(),
            content_type=image.content_type,
        )
        for image in images
    ]
    plan = container.travel_plan_service.attach_images(actor, plan_id, uploads)
    return serialize_plan(plan)


@router.patch("/{plan_id}/complete")
async def complete_plan(
    plan_id: UUID,
    actor: Identity = Depends(current_identity),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Mark the trip as having taken place."""
    return serialize_plan(container.travel_plan_service.mark_completed(actor, plan_id))


@router.patch("/{plan_id}/cancel")
async def cancel_plan(
    plan_id: UUID,
    actor: Identity = Depends(current_identity),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Cancel an active plan."""
    return serialize_plan(container.travel_plan_service.cancel(actor, plan_id))


@router.delete("/{plan_id}")
async def delete_plan(
    plan_id: UUID,
    actor: Identity = Depends(current_identity),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Delete a plan and its join requests."""
    container.travel_plan_service.delete_plan(actor, plan_id)
    return {"message": "Travel plan deleted successfully"}
