from __future__ import annotations

from .normal import cdf, density, inverse_cdf

__all__ = ["cdf", "density", "inverse_cdf"]
