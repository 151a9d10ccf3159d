from __future__ import annotations


class ImgHeaderError(Exception):
    """Base class for errors reported by img-header."""


class ConfigurationError(ImgHeaderError):
    pass


class ResourceLoadError(ImgHeaderError):
    pass


class FilesystemEnumerationError(ImgHeaderError):
    pass


class PerFileTransformError(ImgHeaderError):
    """Raised for a single target image; the walk carries on with the next file."""
