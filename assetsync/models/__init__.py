"""
Models — Pydantic schemas for asset records, change sets, and sync reports.
"""

from .asset import AssetLocator, AssetRecord, ChangeSets
from .report import ItemFailure, PlannedAction, SyncPlan, SyncReport

__all__ = [
    "AssetLocator",
    "AssetRecord",
    "ChangeSets",
    "ItemFailure",
    "PlannedAction",
    "SyncPlan",
    "SyncReport",
]
