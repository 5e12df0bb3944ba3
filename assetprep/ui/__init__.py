"""UI."""

from assetprep.ui.reporter import Reporter

__all__ = ["Reporter"]
