"""Gemini API client for garment photo generation."""

from dataclasses import dataclass

import httpx
from google import genai
from google.genai import errors, types

from catalog_studio.domain.errors import RemoteCallError
from catalog_studio.domain.generation import GeneratedImage
from catalog_studio.services.encoding import decode_payload
from catalog_studio.services.generation import ImageGenerationClient
from catalog_studio.services.shot_requests import InlineImagePart, ShotRequest


@dataclass
class GeminiImageClient(ImageGenerationClient):
    """Image generation client backed by the google-genai SDK."""

    client: genai.Client

    @classmethod
    def create(cls, api_key: str) -> "GeminiImageClient":
        """Create a Gemini image client."""
        return cls(client=genai.Client(api_key=api_key))

    async def generate(
        self, *, model: str, request: ShotRequest
    ) -> list[GeneratedImage]:
        """Call generate_content and collect inline image parts."""
        contents = [types.Content(role="user", parts=_to_sdk_parts(request))]
        config = types.GenerateContentConfig(
            image_config=types.ImageConfig(
                aspect_ratio=request.aspect_ratio,
                image_size=request.image_size,
            )
        )
        try:
            response = await self.client.aio.models.generate_content(
                model=model,
                contents=contents,
                config=config,
            )
        except (errors.APIError, httpx.HTTPError) as exc:
            raise RemoteCallError(f"Image generation failed: {exc}") from exc
        return _extract_images(response)

    async def close(self) -> None:
        """Close the SDK's async HTTP session."""
        await self.client.aio.aclose()


def _to_sdk_parts(request: ShotRequest) -> list[types.Part]:
    parts: list[types.Part] = []
    for part in request.parts:
        if isinstance(part, InlineImagePart):
            parts.append(
                types.Part(
                    inline_data=types.Blob(
                        data=decode_payload(part.data),
                        mime_type=part.mime_type,
                    )
                )
            )
        else:
            parts.append(types.Part(text=part.text))
    return parts


def _extract_images(response: types.GenerateContentResponse) -> list[GeneratedImage]:
    """Return every inline image of the first candidate, in order."""
    candidates = response.candidates or []
    if not candidates or candidates[0].content is None:
        return []
    images: list[GeneratedImage] = []
    for part in candidates[0].content.parts or []:
        inline = part.inline_data
        if inline is None or not inline.data:
            continue
        images.append(GeneratedImage(data=inline.data, mime_type="image/png"))
    return images
