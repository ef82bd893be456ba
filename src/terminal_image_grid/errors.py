"""Exception hierarchy for the terminal image grid."""

from __future__ import annotations


class ImageGridError(Exception):
    """Base class for errors raised by this package."""


class UsageError(ImageGridError):
    """Invalid command-line or configuration input."""


class RendererNotFoundError(ImageGridError):
    """The external renderer executable is not available."""


class RendererError(ImageGridError):
    """The external renderer failed for a reason unrelated to the image."""


class ImageUnavailableError(ImageGridError):
    """A single image vanished or could not be decoded; skip it."""
