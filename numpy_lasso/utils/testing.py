import numbers
import numpy as np


#######################################################################
#                             Assertions                              #
#######################################################################


def is_number(a):
    """Check that a value `a` is numeric"""
    return isinstance(a, numbers.Number)


def is_sparse(x, n_nonzero=None):
    """
    True if the 1D array `x` has at least one exact zero. If `n_nonzero` is
    not None, instead check that `x` has exactly `n_nonzero` nonzero entries.
    """
    nnz = np.count_nonzero(x)
    if n_nonzero is not None:
        return nnz == n_nonzero
    return nnz < x.size


def has_orthonormal_columns(X):
    """Check that the columns of a matrix `X` are orthonormal"""
    return np.allclose(X.T @ X, np.eye(X.shape[1]))


#######################################################################
#                           Data Generators                           #
#######################################################################


def random_tensor(shape, standardize=False):
    """
    Create a random real-valued tensor of shape `shape`. If `standardize` is
    True, ensure each column has mean 0 and std 1.
    """
    offset = np.random.randint(-300, 300, shape)
    X = np.random.rand(*shape) + offset

    if standardize:
        eps = np.finfo(float).eps
        X = (X - X.mean(axis=0)) / (X.std(axis=0) + eps)
    return X


def random_orthonormal_matrix(n_rows, n_cols):
    """
    Create a random matrix of shape (`n_rows`, `n_cols`) whose columns are
    orthonormal. Requires `n_cols` <= `n_rows`.
    """
    assert n_cols <= n_rows, "Need n_cols <= n_rows for orthonormal columns"
    Q, _ = np.linalg.qr(np.random.randn(n_rows, n_cols))
    return Q


def random_regression_problem(n_examples, n_feats, n_informative, noise=0.1):
    """
    Generate a sparse linear regression problem.

    The design matrix has standardized columns, and only `n_informative` of
    the `n_feats` true coefficients are nonzero.

    Parameters
    ----------
    n_examples : int
        Number of rows in the design matrix.
    n_feats : int
        Number of columns in the design matrix.
    n_informative : int
        Number of nonzero entries in the true coefficient vector.
    noise : float
        Standard deviation of the Gaussian noise added to the targets.
        Default is 0.1.

    Returns
    -------
    X : :py:class:`ndarray <numpy.ndarray>` of shape `(n_examples, n_feats)`
        The design matrix.
    y : :py:class:`ndarray <numpy.ndarray>` of shape `(n_examples,)`
        The targets.
    beta : :py:class:`ndarray <numpy.ndarray>` of shape `(n_feats,)`
        The true coefficients used to generate `y`.
    """
    assert n_informative <= n_feats

    X = random_tensor((n_examples, n_feats), standardize=True)

    beta = np.zeros(n_feats)
    ix = np.random.choice(n_feats, n_informative, replace=False)
    beta[ix] = np.random.choice([-1, 1], n_informative) * np.random.uniform(
        1, 5, n_informative
    )

    y = X @ beta + noise * np.random.randn(n_examples)
    return X, y, beta
