"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from travel_buddy.adapters.jwt_token_decoder import JwtTokenDecoder
from travel_buddy.adapters.mail_client import HttpxMailClient
from travel_buddy.adapters.stripe_client import HttpxStripeClient
from travel_buddy.adapters.supabase_asset_store import SupabaseAssetStore
from travel_buddy.adapters.supabase_join_request_repository import (
    SupabaseJoinRequestRepository,
)
from travel_buddy.adapters.supabase_review_repository import SupabaseReviewRepository
from travel_buddy.adapters.supabase_travel_plan_repository import (
    SupabaseTravelPlanRepository,
)
from travel_buddy.adapters.supabase_user_repository import SupabaseUserRepository
from travel_buddy.config import Settings
from travel_buddy.services.join_requests import JoinRequestService
from travel_buddy.services.notifications import NotificationService
from travel_buddy.services.payments import PaymentService
from travel_buddy.services.reviews import ReviewService
from travel_buddy.services.travel_plans import TravelPlanService
from travel_buddy.services.users import IdentityService, UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    identity_service: IdentityService
    user_service: UserService
    travel_plan_service: TravelPlanService
    join_request_service: JoinRequestService
    review_service: ReviewService
    payment_service: PaymentService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    plan_repository = SupabaseTravelPlanRepository(supabase_client)
    join_request_repository = SupabaseJoinRequestRepository(supabase_client)
    review_repository = SupabaseReviewRepository(supabase_client)
    asset_store = SupabaseAssetStore(supabase_client, resolved_settings.storage_bucket)

    mail_client = HttpxMailClient.create(
        api_key=resolved_settings.mail_api_key,
        sender=resolved_settings.mail_from,
        base_url=resolved_settings.mail_base_url,
    )
    stripe_client = HttpxStripeClient.create(
        secret_key=resolved_settings.stripe_secret_key,
        base_url=resolved_settings.stripe_base_url,
    )

    identity_service = IdentityService(
        decoder=JwtTokenDecoder(
            secret=resolved_settings.jwt_secret,
            algorithms=[resolved_settings.jwt_algorithm],
        ),
        repository=user_repository,
    )
    user_service = UserService(user_repository)
    notification_service = NotificationService(
        mail_client=mail_client,
        user_repository=user_repository,
    )
    travel_plan_service = TravelPlanService(
        repository=plan_repository,
        join_requests=join_request_repository,
        asset_store=asset_store,
    )
    join_request_service = JoinRequestService(
        repository=join_request_repository,
        plan_repository=plan_repository,
        notifications=notification_service,
        free_request_limit=resolved_settings.free_pending_request_limit,
    )
    review_service = ReviewService(
        repository=review_repository,
        plan_repository=plan_repository,
        join_request_repository=join_request_repository,
    )
    payment_service = PaymentService(
        client=stripe_client,
        user_service=user_service,
        frontend_url=resolved_settings.frontend_url,
    )

    async def close_resources() -> None:
        await mail_client.close()
        await stripe_client.close()

    return AppContainer(
        settings=resolved_settings,
        identity_service=identity_service,
        user_service=user_service,
        travel_plan_service=travel_plan_service,
        join_request_service=join_request_service,
        review_service=review_service,
        payment_service=payment_service,
        close_resources=close_resources,
    )
