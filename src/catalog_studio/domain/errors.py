"""Error types raised by the generation pipeline."""


class CatalogStudioError(Exception):
    """Base class for catalog studio failures."""


class PreconditionError(CatalogStudioError):
    """A batch cannot start: missing credential, empty inputs or a running batch."""


class EncodingError(CatalogStudioError):
    """A local image could not be read or encoded."""


class RemoteCallError(CatalogStudioError):
    """The image generation service failed or returned an unusable response."""
