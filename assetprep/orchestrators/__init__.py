"""Orchestration layer.

This module contains the high-level workflow that coordinates discovery,
strategy application and action planning.
"""

from assetprep.orchestrators.prepare import Preparation

__all__ = [
    "Preparation",
]
