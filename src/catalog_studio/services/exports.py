"""Filenames and bytes for downloading completed shots."""

import re
from pathlib import Path

from catalog_studio.domain.errors import EncodingError
from catalog_studio.domain.generation import GenerationRecord, GenerationStatus
from catalog_studio.services.encoding import decode_payload

_SLUG_PATTERN = re.compile(r"[^a-z0-9]+")


def export_filename(product_label: str, shot_number: int) -> str:
    """Return ``{label}-shot-{n}.png`` for a 1-based shot number."""
    slug = _SLUG_PATTERN.sub("-", product_label.lower()).strip("-") or "product"
    return f"{slug}-shot-{shot_number}.png"


def decode_output(data_url: str) -> bytes:
    """Decode a generated ``data:`` URL into image bytes."""
    header, separator, payload = data_url.partition(",")
    if not separator or not header.startswith("data:") or ";base64" not in header:
        raise EncodingError("Generated image is not a base64 data URL")
    return decode_payload(payload)


def export_record(
    record: GenerationRecord, product_label: str
) -> list[tuple[str, bytes]]:
    """Return ``(filename, bytes)`` pairs for a completed record, in shot order."""
    if record.status != GenerationStatus.COMPLETED:
        raise ValueError(f"Record {record.target_id} is not completed")
    return [
        (export_filename(product_label, number), decode_output(image))
        for number, image in enumerate(record.images, start=1)
    ]


def write_exports(
    record: GenerationRecord, product_label: str, directory: Path
) -> list[Path]:
    """Write a completed record's shots into ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for filename, data in export_record(record, product_label):
        path = directory / filename
        path.write_bytes(data)
        written.append(path)
    return written
