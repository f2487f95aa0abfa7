"""Application settings management.

This package provides:
- UserSettings: User-configurable settings loaded from config.yaml
"""

from meteodash.settings.user import UserSettings

__all__ = ["UserSettings"]
