"""Tests for container wiring."""

from catalog_studio.adapters.gemini_image_client import GeminiImageClient
from catalog_studio.containers import build_container


def test_build_container_wires_settings(settings) -> None:
    container = build_container(settings)

    assert container.credential == "test-key"
    assert container.orchestrator.model == "test-image-model"
    assert container.orchestrator.shots_per_target == 4
    assert container.orchestrator.client_factory == GeminiImageClient.create
    assert container.library.targets == ()
