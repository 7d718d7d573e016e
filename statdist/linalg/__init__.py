from .linop import LinOp, DenseLinOp, TriangularLinOp, CholeskyLinOp
from .operations import (
    LinOpLike,
    factorize,
    cholesky,
    to_dense,
    solve,
    logdet,
    log_sqrt_det,
    trace,
    trace_Ainv_B,
    mah_dist_squared,
    mahalanobis,
)
