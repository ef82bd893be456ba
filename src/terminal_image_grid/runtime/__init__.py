"""Runtime collaborators: discovery, validation, and version helpers."""

from .discovery import has_image_extension, read_path_list, scan_directory
from .validation import ensure_renderer_available, validate_directory
from .version import resolve_project_version

__all__ = [
    "ensure_renderer_available",
    "has_image_extension",
    "read_path_list",
    "resolve_project_version",
    "scan_directory",
    "validate_directory",
]
