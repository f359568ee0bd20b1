from .curves import CurveSet, generate_curves, nearest_point, trapezoid_auc
from .density import density_profile

__all__ = [
    "CurveSet",
    "generate_curves",
    "nearest_point",
    "trapezoid_auc",
    "density_profile",
]
