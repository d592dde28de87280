"""Shared test fixtures."""

import base64
from collections.abc import Callable
from dataclasses import dataclass, field
from uuid import uuid4

import pytest

from catalog_studio.config import Settings
from catalog_studio.containers import AppContainer, build_container
from catalog_studio.domain.assets import ImageAsset
from catalog_studio.domain.generation import GeneratedImage
from catalog_studio.services.generation import ImageGenerationClient
from catalog_studio.services.shot_requests import ShotRequest

PNG_HEADER = b"\x89PNG\r\n\x1a\n"


def make_asset(name: str, media_type: str = "image/png") -> ImageAsset:
    """Build an asset without going through the encoder."""
    raw = PNG_HEADER + name.encode()
    payload = base64.b64encode(raw).decode("utf-8")
    return ImageAsset(
        id=uuid4().hex,
        raw=raw,
        preview=f"data:{media_type};base64,{payload}",
        payload=payload,
        media_type=media_type,
        name=name,
    )


def png_b64(label: str) -> str:
    return base64.b64encode(PNG_HEADER + label.encode()).decode("utf-8")


Outcome = list[GeneratedImage] | Exception


@dataclass
class FakeImageClient(ImageGenerationClient):
    """Fake generator returning scripted outcomes in call order.

    Once the script runs out every call returns a single image.
    """

    outcomes: list[Outcome] = field(default_factory=list)
    requests: list[ShotRequest] = field(default_factory=list)
    models: list[str] = field(default_factory=list)
    on_call: Callable[[ShotRequest], None] | None = None
    close_count: int = 0

    async def generate(
        self, *, model: str, request: ShotRequest
    ) -> list[GeneratedImage]:
        self.requests.append(request)
        self.models.append(model)
        if self.on_call is not None:
            self.on_call(request)
        if self.outcomes:
            outcome = self.outcomes.pop(0)
        else:
            outcome = [GeneratedImage(data=f"shot-{len(self.requests)}".encode())]
        if isinstance(outcome, Exception):
            raise outcome
        return list(outcome)

    async def close(self) -> None:
        self.close_count += 1


def images(*labels: str) -> list[GeneratedImage]:
    return [GeneratedImage(data=label.encode()) for label in labels]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        gemini_api_key="test-key",
        gemini_model="test-image-model",
    )


@pytest.fixture
def fake_client() -> FakeImageClient:
    return FakeImageClient()


@pytest.fixture
def factory_calls() -> list[str]:
    return []


@pytest.fixture
def container(
    settings: Settings, fake_client: FakeImageClient, factory_calls: list[str]
) -> AppContainer:
    def client_factory(credential: str) -> FakeImageClient:
        factory_calls.append(credential)
        return fake_client

    return build_container(settings, client_factory=client_factory)
