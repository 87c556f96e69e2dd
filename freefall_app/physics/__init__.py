"""
Physics model module.

Free-fall depth as a function of elapsed time, shared by the live readout
and the illustrative depth curve.
"""
from .model import GRAVITY, CurvePoint, depth, depth_curve

__all__ = ["GRAVITY", "CurvePoint", "depth", "depth_curve"]
