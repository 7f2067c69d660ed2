"""Device orientation tracking: Euler/quaternion in, quaternion/matrix out."""

from .control.orientation import OrientationState

__all__ = ["OrientationState"]
__version__ = "0.1.0"
