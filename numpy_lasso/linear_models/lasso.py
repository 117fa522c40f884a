"""Lasso regression via cyclic coordinate descent."""

import numbers
import warnings
from collections import namedtuple

import numpy as np

from ..utils.testing import is_number

_ZERO_COLUMN_POLICIES = ["skip", "raise"]

LassoResult = namedtuple(
    "LassoResult", ["beta", "converged", "n_iter", "max_change", "skipped"]
)


class ConvergenceWarning(UserWarning):
    """Issued when coordinate descent exhausts `max_iter` before converging"""

    pass


class DegenerateColumnError(ValueError):
    """Raised when the design matrix contains an all-zero column"""

    pass


def soft_threshold(z, lam):
    r"""
    The soft-thresholding operator.

    Notes
    -----
    Soft-thresholding is the proximal operator for the scaled L1 norm,
    :math:`\lambda ||\cdot||_1`:

    .. math::

        S_{\lambda}(z) = \left\{
            \begin{array}{lr}
                z - \lambda & : z > \lambda \\
                z + \lambda & : z < -\lambda \\
                0 & : |z| \leq \lambda
            \end{array}
        \right.

    When :math:`\lambda = 0` the operator is the identity.

    Parameters
    ----------
    z : float or :py:class:`ndarray <numpy.ndarray>`
        The value(s) to shrink. Arrays are thresholded element-wise.
    lam : float
        The (non-negative) threshold.

    Returns
    -------
    out : float or :py:class:`ndarray <numpy.ndarray>`
        The shrunk value(s), with the same shape as `z`.
    """
    if lam < 0:
        raise ValueError("Threshold must be non-negative, but got {}".format(lam))

    if np.ndim(z) == 0:
        if z > lam:
            return z - lam
        if z < -lam:
            return z + lam
        return 0.0

    z = np.asarray(z, dtype=float)
    return np.sign(z) * np.maximum(np.abs(z) - lam, 0.0)


def lasso_objective(X, y, beta, lam):
    """Value of ``0.5 * ||y - X @ beta||^2 + lam * ||beta||_1``"""
    resid = y - X @ beta
    return 0.5 * resid @ resid + lam * np.sum(np.abs(beta))


def lambda_max(X, y):
    """
    The smallest penalty for which the all-zero vector is a Lasso solution
    for the problem (`X`, `y`).
    """
    return np.max(np.abs(X.T @ y))


def _check_inputs(X, y, lam, max_iter, tol, zero_column):
    """Validate the solver inputs, returning float copies of `X` and `y`"""
    X = np.asarray(X, dtype=float)
    y = np.asarray(y, dtype=float)

    if X.ndim != 2:
        raise ValueError("X must be two-dimensional, but got {} dims".format(X.ndim))
    if y.ndim != 1:
        raise ValueError("y must be one-dimensional, but got {} dims".format(y.ndim))
    if X.shape[0] != y.shape[0]:
        fstr = "X has {} rows but y has {} entries"
        raise ValueError(fstr.format(X.shape[0], y.shape[0]))
    if not (np.all(np.isfinite(X)) and np.all(np.isfinite(y))):
        raise ValueError("X and y must contain only finite values")

    if not is_number(lam) or not np.isfinite(lam) or lam < 0:
        raise ValueError("lam must be finite and non-negative, but got {}".format(lam))
    if not isinstance(max_iter, numbers.Integral) or max_iter < 1:
        fstr = "max_iter must be a positive integer, but got {}"
        raise ValueError(fstr.format(max_iter))
    if not is_number(tol) or not np.isfinite(tol) or tol < 0:
        raise ValueError("tol must be finite and non-negative, but got {}".format(tol))

    if zero_column not in _ZERO_COLUMN_POLICIES:
        fstr = "zero_column must be one of {}, but got '{}'"
        raise ValueError(fstr.format(_ZERO_COLUMN_POLICIES, zero_column))

    # columns are the dominant access pattern
    return np.asfortranarray(X), y.copy()


def lasso_coordinate_descent(
    X,
    y,
    lam,
    max_iter=1000,
    tol=1e-6,
    zero_column="skip",
    callback=None,
    verbose=False,
):
    r"""
    Minimize the Lasso objective using cyclic coordinate descent.

    Notes
    -----
    The Lasso [1]_ estimate for the coefficients of a linear model is the
    minimizer of the L1-penalized least-squares loss

    .. math::

        \mathcal{L}(\beta) = \frac{1}{2}
            ||\mathbf{y} - \mathbf{X} \beta||_2^2 + \lambda ||\beta||_1

    Cyclic coordinate descent [2]_ minimizes :math:`\mathcal{L}` one
    coefficient at a time, visiting the coordinates in a fixed order. Holding
    every other coefficient fixed, the minimizer for coordinate `j` has the
    closed form

    .. math::

        \beta_j \leftarrow S_{\lambda / ||\mathbf{x}_j||^2}
            \left( \frac{\rho_j}{||\mathbf{x}_j||^2} \right),
        \ \ \ \
        \rho_j = \mathbf{x}_j^\top \mathbf{r} + ||\mathbf{x}_j||^2 \beta_j

    where :math:`S` is the soft-thresholding operator and
    :math:`\mathbf{r} = \mathbf{y} - \mathbf{X} \beta` is the current
    residual. Rather than recompute **r** from scratch, it is updated in
    place after every coordinate step:

    .. math::

        \mathbf{r} \leftarrow \mathbf{r} +
            \mathbf{x}_j (\beta_j^{old} - \beta_j)

    so that the identity :math:`\mathbf{r} = \mathbf{y} - \mathbf{X} \beta`
    holds (to floating-point rounding) after every update. The solver stops
    after the first full sweep in which no coefficient moves by `tol` or
    more.

    References
    ----------
    .. [1] Tibshirani, R. (1996). Regression shrinkage and selection via the
       lasso. *Journal of the Royal Statistical Society, Series B (Methodological),
       58(1)*: 267-288.
    .. [2] Friedman, J., Hastie, T., & Tibshirani, R. (2010). Regularization
       paths for generalized linear models via coordinate descent. *Journal of
       Statistical Software, 33(1)*: 1-22.

    Parameters
    ----------
    X : :py:class:`ndarray <numpy.ndarray>` of shape `(N, M)`
        The design matrix, consisting of `N` examples, each of dimension `M`.
    y : :py:class:`ndarray <numpy.ndarray>` of shape `(N,)`
        The targets for each of the `N` examples in `X`.
    lam : float
        The L1 penalty weight, :math:`\lambda`. Must be non-negative.
    max_iter : int
        The maximum number of full sweeps over the coordinates. Default is
        1000.
    tol : float
        Convergence threshold on the largest coefficient change within a
        sweep. Default is 1e-6.
    zero_column : {'skip', 'raise'}
        What to do with all-zero columns of `X`, whose coordinate update is
        undefined. If 'skip', the corresponding coefficient is left at 0 and
        the column index is reported in the result. If 'raise', a
        :class:`DegenerateColumnError` is raised before fitting. Default is
        'skip'.
    callback : callable or None
        If not None, called as ``callback(j, beta, r)`` after every
        coordinate update, with the live coefficient and residual arrays.
        These must not be modified. Default is None.
    verbose : bool
        Whether to print the largest coefficient change after each sweep.
        Default is False.

    Returns
    -------
    result : :class:`LassoResult`
        A namedtuple with fields `beta` (the fitted coefficients, shape
        `(M,)`), `converged` (whether the `tol` criterion was met),
        `n_iter` (the number of sweeps performed), `max_change` (the largest
        coefficient change in the final sweep), and `skipped` (a tuple of the
        indices of all-zero columns).
    """
    X, r = _check_inputs(X, y, lam, max_iter, tol, zero_column)
    M = X.shape[1]

    # ||x_j||^2 is fixed for the duration of the solve
    col_norms = np.einsum("ij,ij->j", X, X)
    skipped = tuple(int(j) for j in np.flatnonzero(col_norms == 0))

    if skipped and zero_column == "raise":
        fstr = "Columns {} of X are all zero; their coefficients are undefined"
        raise DegenerateColumnError(fstr.format(list(skipped)))

    active = [j for j in range(M) if col_norms[j] != 0]
    beta = np.zeros(M)

    converged = False
    for i in range(max_iter):
        max_change = 0.0

        for j in active:
            X_j, norm2 = X[:, j], col_norms[j]
            rho = X_j @ r + norm2 * beta[j]

            beta_old = beta[j]
            beta[j] = soft_threshold(rho / norm2, lam / norm2)

            delta = beta_old - beta[j]
            if delta != 0:
                r += X_j * delta

            max_change = max(max_change, abs(delta))

            if callback is not None:
                callback(j, beta, r)

        if verbose:
            print("[Sweep {}] Max change: {:.8f}".format(i + 1, max_change))

        if max_change < tol:
            converged = True
            break

    n_iter = i + 1
    if not converged:
        fstr = "Coordinate descent did not converge after {} sweeps (max change {:.3g})"
        warnings.warn(fstr.format(n_iter, max_change), ConvergenceWarning)

    if verbose:
        fstr = "Converged: {} | Sweeps: {} | Nonzero coefficients: {}/{}"
        print(fstr.format(converged, n_iter, np.count_nonzero(beta), M))

    return LassoResult(beta, converged, n_iter, max_change, skipped)


class LassoRegression:
    def __init__(
        self, alpha=1.0, fit_intercept=True, max_iter=1000, tol=1e-6, zero_column="skip"
    ):
        r"""
        A Lasso regression model fit via cyclic coordinate descent.

        Notes
        -----
        Lasso regression adds a penalty proportional to the L1-norm of the
        model coefficients to the standard least-squares loss:

        .. math::

            \mathcal{L}_{Lasso} = \frac{1}{2} (\mathbf{y} - \mathbf{X} \beta)^\top
                (\mathbf{y} - \mathbf{X} \beta) + \alpha ||\beta||_1

        where :math:`\alpha` is a weight controlling the severity of the
        penalty. Unlike the L2 penalty in ridge regression, the L1 penalty
        drives some coefficients exactly to zero, so the fitted model is
        sparse.

        When `fit_intercept` is True the intercept is not penalized. It is
        estimated by centering the columns of **X** and the targets **y**,
        fitting the penalized coefficients on the centered data, and then
        setting :math:`b_0 = \bar{y} - \bar{\mathbf{x}}^\top \beta`.

        Parameters
        ----------
        alpha : float
            L1 regularization coefficient. Larger values correspond to larger
            penalty on the L1 norm of the model coefficients. Default is 1.
        fit_intercept : bool
            Whether to fit an additional (unpenalized) intercept term. Default
            is True.
        max_iter : int
            The maximum number of coordinate descent sweeps. Default is 1000.
        tol : float
            Convergence threshold on the largest coefficient change within a
            sweep. Default is 1e-6.
        zero_column : {'skip', 'raise'}
            How to treat constant-zero columns of the (centered) design
            matrix. See :func:`lasso_coordinate_descent`. Default is 'skip'.

        Attributes
        ----------
        beta : :py:class:`ndarray <numpy.ndarray>` of shape `(M,)` or `(M + 1,)` or None
            Fitted model coefficients. If `fit_intercept` is True, the first
            entry is the intercept.
        n_iter : int or None
            Number of coordinate descent sweeps used during the last fit.
        converged : bool or None
            Whether the last fit met the convergence tolerance.
        skipped : tuple or None
            Indices of the columns of `X` skipped as all-zero during the last
            fit.
        """  # noqa: E501
        self.beta = None
        self.alpha = alpha
        self.fit_intercept = fit_intercept
        self.max_iter = max_iter
        self.tol = tol
        self.zero_column = zero_column

        self.n_iter = None
        self.converged = None
        self.skipped = None
        self._is_fit = False

    def fit(self, X, y, verbose=False):
        """
        Fit the regression coefficients via coordinate descent.

        Parameters
        ----------
        X : :py:class:`ndarray <numpy.ndarray>` of shape `(N, M)`
            A dataset consisting of `N` examples, each of dimension `M`.
        y : :py:class:`ndarray <numpy.ndarray>` of shape `(N,)`
            The targets for each of the `N` examples in `X`.
        verbose : bool
            Whether to print solver progress after each sweep. Default is
            False.

        Returns
        -------
        self : :class:`LassoRegression <numpy_lasso.linear_models.LassoRegression>` instance
        """  # noqa: E501
        X = np.asarray(X, dtype=float)
        y = np.asarray(y, dtype=float)
        if y.ndim == 2 and y.shape[1] == 1:
            y = y.ravel()

        if self.fit_intercept:
            if X.ndim != 2:
                fstr = "X must be two-dimensional, but got {} dims"
                raise ValueError(fstr.format(X.ndim))

            X_mean, y_mean = X.mean(axis=0), y.mean()
            constant = np.ptp(X, axis=0) == 0
            X, y = X - X_mean, y - y_mean

            # centering a constant column can leave rounding noise rather
            # than exact zeros
            X[:, constant] = 0.0

        res = lasso_coordinate_descent(
            X,
            y,
            self.alpha,
            max_iter=self.max_iter,
            tol=self.tol,
            zero_column=self.zero_column,
            verbose=verbose,
        )

        self.beta = res.beta
        if self.fit_intercept:
            self.beta = np.r_[y_mean - X_mean @ res.beta, res.beta]

        self.n_iter = res.n_iter
        self.converged = res.converged
        self.skipped = res.skipped
        self._is_fit = True
        return self

    def predict(self, X):
        """
        Use the trained model to generate predictions on a new collection of
        data points.

        Parameters
        ----------
        X : :py:class:`ndarray <numpy.ndarray>` of shape `(Z, M)`
            A dataset consisting of `Z` new examples, each of dimension `M`.

        Returns
        -------
        y_pred : :py:class:`ndarray <numpy.ndarray>` of shape `(Z,)`
            The model predictions for the items in `X`.
        """
        assert self._is_fit, "Must call `fit` before generating predictions"

        # convert X to a design matrix if we're fitting an intercept
        if self.fit_intercept:
            X = np.c_[np.ones(X.shape[0]), X]
        return X @ self.beta
