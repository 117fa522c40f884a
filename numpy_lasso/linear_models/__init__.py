"""Sparse linear models fit by coordinate descent."""

from .lasso import (
    LassoRegression,
    LassoResult,
    ConvergenceWarning,
    DegenerateColumnError,
    soft_threshold,
    lasso_objective,
    lambda_max,
    lasso_coordinate_descent,
)
