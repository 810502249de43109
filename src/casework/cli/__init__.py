"""Command line interface for the casework estimator."""
