"""Utilities shared by the models and their tests."""

from . import testing
