"""Reference directory factory.

Provides get_directory() / set_directory() to swap implementations. The
adapter is chosen by the REVIEWS_DIRECTORY_ADAPTER environment variable;
only the in-memory ``fake`` adapter ships with this service.
"""

import os

from reviews.directory.port import ReferenceDirectory

_current_directory: ReferenceDirectory | None = None


def get_directory() -> ReferenceDirectory:
    """Return the configured reference directory (singleton)."""
    global _current_directory
    if _current_directory is None:
        adapter = os.environ.get("REVIEWS_DIRECTORY_ADAPTER", "fake")
        if adapter == "fake":
            from reviews.directory.fake_adapter import FakeDirectory

            _current_directory = FakeDirectory()
        else:
            raise ValueError(f"Unknown directory adapter: {adapter}")
    return _current_directory


def set_directory(directory: ReferenceDirectory) -> None:
    """Override the active directory (useful for tests and integrations)."""
    global _current_directory
    _current_directory = directory


def reset_directory() -> None:
    """Reset the directory singleton."""
    global _current_directory
    _current_directory = None
