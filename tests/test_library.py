"""Tests for the in-memory asset library."""

import asyncio

import pytest

from catalog_studio.domain.errors import EncodingError
from catalog_studio.services.library import AssetLibrary, UploadItem
from tests.conftest import PNG_HEADER


def test_add_and_remove_keep_order() -> None:
    library = AssetLibrary()
    added = asyncio.run(
        library.add_scenes(
            [
                UploadItem(PNG_HEADER + b"1", name="one"),
                UploadItem(PNG_HEADER + b"2", name="two"),
                UploadItem(PNG_HEADER + b"3", name="three"),
            ]
        )
    )

    assert library.remove_scene(added[1].id) is True
    assert [asset.name for asset in library.scenes] == ["one", "three"]
    assert library.remove_scene(added[1].id) is False


def test_targets_are_separate_from_scenes() -> None:
    library = AssetLibrary()
    [target] = asyncio.run(library.add_targets([UploadItem(PNG_HEADER, name="knit")]))

    assert library.scenes == ()
    assert library.get_target(target.id) is target
    assert library.get_target("missing") is None
    assert library.remove_target(target.id) is True
    assert library.targets == ()


def test_failed_upload_adds_nothing() -> None:
    library = AssetLibrary()

    with pytest.raises(EncodingError):
        asyncio.run(
            library.add_targets([UploadItem(PNG_HEADER, name="ok"), UploadItem(b"")])
        )

    assert library.targets == ()
