"""
Orbit Propagation Package
=========================

Assembles the numerical and DSST propagators and drives their comparison runs.
"""

from .propagator import run_propagations, run_propagation, NUMERICAL_PROPAGATOR_NAME, DSST_PROPAGATOR_NAME

__all__ = ['run_propagations', 'run_propagation', 'NUMERICAL_PROPAGATOR_NAME', 'DSST_PROPAGATOR_NAME']
