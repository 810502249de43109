"""Parametric furniture module estimator."""

__version__ = "0.1.0"
