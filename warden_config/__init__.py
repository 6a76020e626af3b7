"""
Warden Configuration Package.

Provides Pydantic Settings loaded from environment variables.
"""

from warden_config.settings import Settings

__all__ = ["Settings"]
