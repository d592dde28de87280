"""In-memory collections of scene references and target garments."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from catalog_studio.domain.assets import ImageAsset
from catalog_studio.services.encoding import ImageResource, create_asset


@dataclass(frozen=True)
class UploadItem:
    """Raw upload waiting to be turned into an asset."""

    resource: ImageResource
    media_type: str | None = None
    name: str | None = None


@dataclass
class AssetLibrary:
    """Ordered scene and target sets for the current session."""

    _scenes: list[ImageAsset] = field(default_factory=list)
    _targets: list[ImageAsset] = field(default_factory=list)

    @property
    def scenes(self) -> tuple[ImageAsset, ...]:
        return tuple(self._scenes)

    @property
    def targets(self) -> tuple[ImageAsset, ...]:
        return tuple(self._targets)

    async def add_scenes(self, uploads: Iterable[UploadItem]) -> list[ImageAsset]:
        """Encode uploads and append them to the scene references."""
        assets = await _create_assets(uploads)
        self._scenes.extend(assets)
        return assets

    async def add_targets(self, uploads: Iterable[UploadItem]) -> list[ImageAsset]:
        """Encode uploads and append them to the targets."""
        assets = await _create_assets(uploads)
        self._targets.extend(assets)
        return assets

    def remove_scene(self, asset_id: str) -> bool:
        return _remove(self._scenes, asset_id)

    def remove_target(self, asset_id: str) -> bool:
        return _remove(self._targets, asset_id)

    def get_target(self, asset_id: str) -> ImageAsset | None:
        for asset in self._targets:
            if asset.id == asset_id:
                return asset
        return None


async def _create_assets(uploads: Iterable[UploadItem]) -> list[ImageAsset]:
    # All uploads are encoded before any is added, so a bad file adds nothing.
    return [
        await create_asset(item.resource, media_type=item.media_type, name=item.name)
        for item in uploads
    ]


def _remove(assets: list[ImageAsset], asset_id: str) -> bool:
    for index, asset in enumerate(assets):
        if asset.id == asset_id:
            del assets[index]
            return True
    return False
