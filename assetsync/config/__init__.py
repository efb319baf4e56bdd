"""
Configuration — Environment-driven settings for sync runs.
"""

from .settings import SyncSettings

__all__ = ["SyncSettings"]
