"""Runtime review settings.

Defaults come from environment variables and can be changed at runtime by
moderators through the review settings API.

    REVIEWS_AUTO_APPROVE            new reviews start Approved (default: off)
    REVIEWS_TRACK_LOCALE            store the submitter's locale (default: off)
    REVIEWS_AUTO_APPROVE_FEEDBACK   new votes start Approved (default: on)
"""

import os
import threading
from dataclasses import dataclass, fields, replace

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class ReviewSettings:
    auto_approve: bool = False
    track_locale: bool = False
    auto_approve_feedback: bool = True

    @classmethod
    def from_env(cls) -> "ReviewSettings":
        return cls(
            auto_approve=_env_flag("REVIEWS_AUTO_APPROVE", False),
            track_locale=_env_flag("REVIEWS_TRACK_LOCALE", False),
            auto_approve_feedback=_env_flag("REVIEWS_AUTO_APPROVE_FEEDBACK", True),
        )

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


_lock = threading.Lock()
_current_settings: ReviewSettings | None = None


def get_settings() -> ReviewSettings:
    """Return the active settings, loading them from the environment on first use."""
    global _current_settings
    with _lock:
        if _current_settings is None:
            _current_settings = ReviewSettings.from_env()
        return _current_settings


def update_settings(**changes) -> ReviewSettings:
    """Replace individual settings. Unknown names raise ``TypeError``."""
    global _current_settings
    with _lock:
        base = _current_settings or ReviewSettings.from_env()
        _current_settings = replace(base, **changes)
        return _current_settings


def reset_settings() -> None:
    """Forget runtime changes; the next read reloads from the environment."""
    global _current_settings
    with _lock:
        _current_settings = None
