"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from catalog_studio.adapters.gemini_image_client import GeminiImageClient
from catalog_studio.config import Settings, resolve_credential
from catalog_studio.services.batch import BatchOrchestrator, ClientFactory
from catalog_studio.services.library import AssetLibrary


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    library: AssetLibrary
    orchestrator: BatchOrchestrator
    credential: str | None
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None,
    client_factory: ClientFactory | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    orchestrator = BatchOrchestrator(
        client_factory=client_factory or GeminiImageClient.create,
        model=resolved_settings.gemini_model,
        shots_per_target=resolved_settings.shots_per_target,
        aspect_ratio=resolved_settings.aspect_ratio,
        image_size=resolved_settings.image_size,
    )

    async def close_resources() -> None:
        await orchestrator.close()

    return AppContainer(
        settings=resolved_settings,
        library=AssetLibrary(),
        orchestrator=orchestrator,
        credential=resolve_credential(resolved_settings),
        close_resources=close_resources,
    )
