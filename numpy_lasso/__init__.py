# noqa
"""Lasso regression by cyclic coordinate descent, implemented in NumPy"""

from . import utils
from . import linear_models
