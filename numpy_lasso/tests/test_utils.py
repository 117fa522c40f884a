# flake8: noqa
import numpy as np

from numpy_lasso.utils.testing import (
    is_number,
    is_sparse,
    has_orthonormal_columns,
    random_tensor,
    random_orthonormal_matrix,
    random_regression_problem,
)


def test_random_tensor_standardize(N=5):
    np.random.seed(12345)
    for _ in range(N):
        shape = (np.random.randint(5, 50), np.random.randint(1, 10))
        X = random_tensor(shape, standardize=True)

        assert X.shape == shape
        np.testing.assert_almost_equal(X.mean(axis=0), np.zeros(shape[1]))
        np.testing.assert_almost_equal(X.std(axis=0), np.ones(shape[1]))


def test_random_orthonormal_matrix(N=5):
    np.random.seed(12345)
    for _ in range(N):
        n_rows = np.random.randint(2, 50)
        n_cols = np.random.randint(1, n_rows + 1)

        Q = random_orthonormal_matrix(n_rows, n_cols)
        assert Q.shape == (n_rows, n_cols)
        assert has_orthonormal_columns(Q)


def test_random_regression_problem():
    np.random.seed(12345)
    X, y, beta = random_regression_problem(40, 10, 3, noise=0.0)

    assert X.shape == (40, 10)
    assert y.shape == (40,)
    assert is_sparse(beta, n_nonzero=3)
    np.testing.assert_almost_equal(X @ beta, y)


def test_assertions():
    assert is_number(3) and is_number(2.5) and not is_number("3")
    assert is_sparse(np.array([1.0, 0.0, 2.0]))
    assert not is_sparse(np.array([1.0, 2.0]))
    assert not has_orthonormal_columns(np.array([[1.0, 1.0], [0.0, 1.0]]))
