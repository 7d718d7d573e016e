from .legendre import Legendre, LEGENDRE_ASYMPTOTIC_THRESHOLD
from .fixed import FixedLocationer, fixed
