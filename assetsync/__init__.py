"""
assetsync — Reconcile shared asset repositories with a source of truth.
"""

__version__ = "0.1.0"
