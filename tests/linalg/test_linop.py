# test_linop.py
import numpy as np
from scipy.linalg import cholesky
import pytest

from statdist.linalg.linop import (
    DenseLinOp, TriangularLinOp, CholeskyLinOp
)


def approx(a, b, tol=1e-12):
    return np.allclose(a, b, atol=tol, rtol=0)

class TestDenseLinOp:
    @classmethod
    def setup_class(cls):
        cls.n = 3
        cls.arr = np.array([[4.0, 1.0, 0.0], [1.0, 3.0, 0.5], [0.0, 0.5, 2.0]])
        cls.op = DenseLinOp(cls.arr, copy=True)

    def test_array_properties(self):
        assert self.op.shape == (self.n, self.n)
        assert self.op.dtype == self.arr.dtype
        assert np.array_equal(self.op.to_dense(), self.arr)
        assert self.op.to_dense() is not self.arr

    def test_linalg_operations(self):
        assert np.isclose(self.op.trace(), np.trace(self.arr))
        assert approx(self.op.logdet(), np.linalg.slogdet(self.arr)[1])
        assert np.array_equal(self.op.diag(), np.diag(self.arr))

        b1 = np.ones((self.n,))
        B = np.ones((self.n, 4))
        assert approx(self.op.solve(b1), np.linalg.solve(self.arr, b1))
        assert approx(self.op.solve(B), np.linalg.solve(self.arr, B))
        assert approx(self.op.matvec(b1), self.arr @ b1)
        assert approx(self.op.matmat(B), self.arr @ B)

    def test_bad_rhs(self):
        with pytest.raises(ValueError):
            self.op.solve(np.ones(self.n + 1))

    def test_logdet_negative_determinant(self):
        op = DenseLinOp(np.diag([1.0, -2.0]))
        with pytest.raises(np.linalg.LinAlgError):
            op.logdet()

    def test_non_square(self):
        op = DenseLinOp(np.ones((2, 3)))
        with pytest.raises(np.linalg.LinAlgError):
            op.trace()


class TestTriangularLinOp:
    @classmethod
    def setup_class(cls):
        cls.L = np.array([[2.0, 0.0, 0.0], [1.0, 3.0, 0.0], [-1.0, 0.5, 1.5]])
        cls.op = TriangularLinOp(cls.L, lower=True)

    def test_ignores_other_triangle(self):
        noisy = self.L + np.triu(np.ones((3, 3)), k=1)
        op = TriangularLinOp(noisy, lower=True)
        assert np.array_equal(op.to_dense(), self.L)

    def test_transpose_swaps_triangle(self):
        U = self.op.T
        assert not U.lower
        assert np.array_equal(U.to_dense(), self.L.T)
        assert U.T.lower

    def test_solve(self):
        b = np.array([1.0, 2.0, 3.0])
        assert approx(self.op.solve(b), np.linalg.solve(self.L, b))
        assert approx(self.op.solve(b, trans=1), np.linalg.solve(self.L.T, b))
        assert approx(self.op.T.solve(b), np.linalg.solve(self.L.T, b))

    def test_singular_solve_raises(self):
        op = TriangularLinOp(np.array([[1.0, 0.0], [2.0, 0.0]]), lower=True)
        with pytest.raises(np.linalg.LinAlgError):
            op.solve(np.ones(2))

    def test_logdet(self):
        assert approx(self.op.logdet(), np.log(2.0 * 3.0 * 1.5))
        bad = TriangularLinOp(np.diag([1.0, -1.0]))
        with pytest.raises(np.linalg.LinAlgError):
            bad.logdet()


class TestCholeskyLinOp:
    @classmethod
    def setup_class(cls):
        cls.A = np.array([[4.0, 1.0, 0.0], [1.0, 3.0, 0.5], [0.0, 0.5, 2.0]])
        cls.L = cholesky(cls.A, lower=True)
        cls.op = CholeskyLinOp(TriangularLinOp(cls.L, lower=True))

    def test_requires_triangular_root(self):
        with pytest.raises(ValueError):
            CholeskyLinOp(DenseLinOp(self.L))

    def test_upper_root_is_normalized(self):
        op = CholeskyLinOp(TriangularLinOp(self.L.T, lower=False))
        assert op.root.lower
        assert approx(op.to_dense(), self.A)

    def test_dense_and_factors(self):
        assert approx(self.op.to_dense(), self.A)
        assert approx(self.op.cholesky(lower=True).to_dense(), self.L)
        assert approx(self.op.cholesky(lower=False).to_dense(), self.L.T)

    def test_structured_operations(self):
        b = np.array([1.0, -2.0, 0.5])
        B = np.arange(6.0).reshape(3, 2)
        assert approx(self.op.solve(b), np.linalg.solve(self.A, b))
        assert approx(self.op.solve(B), np.linalg.solve(self.A, B))
        assert approx(self.op.matvec(b), self.A @ b)
        assert approx(self.op.matmat(B), self.A @ B)
        assert approx(self.op.diag(), np.diag(self.A))
        assert approx(self.op.trace(), np.trace(self.A))
        assert approx(self.op.logdet(), np.linalg.slogdet(self.A)[1])
        assert approx(self.op.log_sqrt_det(), 0.5 * np.linalg.slogdet(self.A)[1])
