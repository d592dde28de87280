"""Command-line entrypoint: generate a catalog from two image folders."""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from catalog_studio.app_logging import configure_logging
from catalog_studio.containers import AppContainer, build_container
from catalog_studio.domain.errors import CatalogStudioError
from catalog_studio.domain.generation import GenerationStatus
from catalog_studio.services.exports import write_exports
from catalog_studio.services.library import UploadItem

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = {".jpg", ".jpeg", ".png", ".webp", ".gif"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catalog-studio",
        description="Generate fashion shots for every garment in a folder.",
    )
    parser.add_argument("--scenes", type=Path, required=True, help="scene folder")
    parser.add_argument("--targets", type=Path, required=True, help="garment folder")
    parser.add_argument("--out", type=Path, required=True, help="output folder")
    parser.add_argument(
        "--verbose", action="store_true", help="enable debug logging"
    )
    return parser


def list_images(directory: Path) -> list[Path]:
    """Return image files in a directory, sorted by name."""
    return sorted(
        path
        for path in directory.iterdir()
        if path.is_file() and path.suffix.lower() in IMAGE_SUFFIXES
    )


async def run(
    container: AppContainer, scenes_dir: Path, targets_dir: Path, out_dir: Path
) -> int:
    """Run one batch and write exports; return the process exit code."""
    library = container.library
    await library.add_scenes(UploadItem(path) for path in list_images(scenes_dir))
    await library.add_targets(UploadItem(path) for path in list_images(targets_dir))
    if not library.scenes or not library.targets:
        print("Nothing to do: need at least one scene and one target image.")
        return 1

    orchestrator = container.orchestrator
    await orchestrator.run_batch(library.targets, library.scenes, container.credential)

    exit_code = 0
    pairs = zip(library.targets, orchestrator.records, strict=True)
    for index, (target, record) in enumerate(pairs, start=1):
        if record.status == GenerationStatus.COMPLETED:
            # Labels repeat when garments differ only by extension.
            target_dir = out_dir / f"{index:02d}-{target.label}"
            written = write_exports(record, target.label, target_dir)
            print(f"{target.label}: completed, {len(written)} shot(s)")
        else:
            exit_code = 1
            print(f"{target.label}: {record.status} ({record.error})")
    return exit_code


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments and run the batch."""
    parser = build_parser()
    args = parser.parse_args(argv)
    for flag, directory in (("--scenes", args.scenes), ("--targets", args.targets)):
        if not directory.is_dir():
            parser.error(f"{flag}: {directory} is not a directory")
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    container = build_container()
    try:
        return asyncio.run(run(container, args.scenes, args.targets, args.out))
    except CatalogStudioError as exc:
        logger.error("Batch aborted: %s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
