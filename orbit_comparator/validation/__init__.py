"""
Validation Package
==================

Test suite for the numerical versus DSST orbit comparator.

Modules:
--------
- test_configuration   : Parsing and validation of YAML inputs
- test_helpers         : TLE, time and logging utilities
- test_orbit_converter : Orbital element conversions and Keplerian propagation
- test_environment     : Central body, gravity fields, frames and initial orbits
- test_integrator      : Integrator selection and tolerances
- test_force_catalog   : Numerical and DSST force stacks
- test_propagator      : Two-body agreement and conservation of both propagators
- test_scenarios       : End-to-end runs of the input files in data/inputs

Helpers:
--------
- orbit_converter      : Closed-form two-body reference the Orekit runs are checked against

Tests needing Orekit skip when orekit_jpype or the Orekit data folder is
missing. The data folder is taken from OREKIT_DATA_PATH, $HOME/orekit-data or
the orekitdata package.

Usage:
------
Run all tests:
  python -m pytest orbit_comparator/validation/ -v

Skip the long scenarios:
  python -m pytest orbit_comparator/validation/ -v -m "not slow"

Run a specific test class:
  python -m pytest orbit_comparator/validation/test_integrator.py::TestIntegratorSelection -v
"""
