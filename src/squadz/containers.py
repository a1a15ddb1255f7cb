"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from squadz.config import Settings, resolve_dashboard_password
from squadz.services.locations import LocationCache
from squadz.services.maintenance import CleanupScheduler
from squadz.services.membership import MembershipService
from squadz.services.sessions import SessionStore
from squadz.services.squads import SquadRegistry


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    squad_registry: SquadRegistry
    session_store: SessionStore
    location_cache: LocationCache
    membership_service: MembershipService
    cleanup_scheduler: CleanupScheduler
    dashboard_password: str
    dashboard_password_generated: bool
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    squad_registry = SquadRegistry(max_members=resolved_settings.max_squad_size)
    session_store = SessionStore()
    location_cache = LocationCache(ttl_seconds=resolved_settings.location_ttl_secs)
    membership_service = MembershipService(
        registry=squad_registry,
        sessions=session_store,
        locations=location_cache,
        session_ttl_secs=resolved_settings.session_ttl_secs,
    )
    cleanup_scheduler = CleanupScheduler(
        sessions=session_store,
        locations=location_cache,
        interval_secs=resolved_settings.cleanup_interval_secs,
    )
    dashboard_password, generated = resolve_dashboard_password(
        resolved_settings.dashboard_password
    )

    async def close_resources() -> None:
        await cleanup_scheduler.stop()

    return AppContainer(
        settings=resolved_settings,
        squad_registry=squad_registry,
        session_store=session_store,
        location_cache=location_cache,
        membership_service=membership_service,
        cleanup_scheduler=cleanup_scheduler,
        dashboard_password=dashboard_password,
        dashboard_password_generated=generated,
        close_resources=close_resources,
    )
