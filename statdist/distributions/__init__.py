from .interfaces import Quantiler, Rander, LogProber, Entropier, RandLogProber
from .univariate import Normal1D, UnitNormal, Exponential
from .normal import Normal
from .uniform import Bound, Uniform
