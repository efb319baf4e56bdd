"""
Reliability Module — Failure isolation for batch sync passes.
"""

from .isolation import FailureIsolator, call_safely

__all__ = [
    "FailureIsolator",
    "call_safely",
]
