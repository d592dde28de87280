"""Prompt construction for a single generation shot."""

from dataclasses import dataclass

from catalog_studio.domain.assets import ImageAsset

DEFAULT_ASPECT_RATIO = "3:4"
DEFAULT_IMAGE_SIZE = "1K"

SYSTEM_PROMPT = """You are a world-class commercial fashion photographer.
TASK: Generate a professional 4K fashion photograph.

STRICT REQUIREMENTS:
1. BACKGROUND & SETTING: You MUST use the exact same background, environment, \
and lighting as shown in the provided "SCENE REFERENCE" image. The setting must \
remain perfectly consistent across all generations.
2. POSE: You MUST replicate the pose and camera angle from the "SCENE REFERENCE" \
image.
3. TARGET PRODUCT: The model MUST be wearing the "TARGET GARMENT". Replicate its \
color, knit pattern, texture, and silhouette with 100% accuracy.
4. MODEL FACE VARIETY: For each generation, use a DIFFERENT, unique, and realistic \
face. Ensure the faces are diverse and professional. The face should look natural \
and seamlessly integrated into the scene.
5. QUALITY: Output must be 4K, sharp, professional editorial quality."""

SCENE_LABEL = "SCENE REFERENCE (Background & Pose):"
TARGET_LABEL = "TARGET GARMENT (Garment to feature):"
FINAL_INSTRUCTION = "Generate the 4K photo now with a unique model face."


@dataclass(frozen=True)
class TextPart:
    """Instruction text segment."""

    text: str


@dataclass(frozen=True)
class InlineImagePart:
    """Base64 image attachment tagged with its media type."""

    data: str
    mime_type: str


RequestPart = TextPart | InlineImagePart


@dataclass(frozen=True)
class ShotRequest:
    """Ordered prompt parts plus output parameters for one generation call."""

    parts: tuple[RequestPart, ...]
    aspect_ratio: str = DEFAULT_ASPECT_RATIO
    image_size: str = DEFAULT_IMAGE_SIZE


def build_shot_request(
    shot_index: int,
    scene_ref: ImageAsset,
    target: ImageAsset,
    *,
    aspect_ratio: str = DEFAULT_ASPECT_RATIO,
    image_size: str = DEFAULT_IMAGE_SIZE,
) -> ShotRequest:
    """Build the request for shot ``shot_index`` (zero-based)."""
    parts: tuple[RequestPart, ...] = (
        TextPart(SYSTEM_PROMPT),
        TextPart(f"SHOT #{shot_index + 1}: Use a unique model face for this shot."),
        TextPart(SCENE_LABEL),
        InlineImagePart(data=scene_ref.payload, mime_type=scene_ref.media_type),
        TextPart(TARGET_LABEL),
        InlineImagePart(data=target.payload, mime_type=target.media_type),
        TextPart(FINAL_INSTRUCTION),
    )
    return ShotRequest(parts=parts, aspect_ratio=aspect_ratio, image_size=image_size)
