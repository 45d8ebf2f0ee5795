"""
Unit Tests for the Propagation Driver
=====================================

Two-body runs of both propagators, checked against the closed-form Keplerian
solution and the two-body integrals of motion.

Tests:
------
TestTwoBodyAgreement
  - test_matches_closed_form     : verify both final positions within 1 m of Kepler after 1 day
  - test_zero_duration           : verify both propagators return the initial osculating state

TestTwoBodyIntegrals
  - test_specific_energy         : verify energy is conserved to 1e-8 (relative)
  - test_angular_momentum        : verify angular momentum is conserved to 1e-8 (relative)

TestRunOutput
  - test_result_keys             : verify the result dictionary layout
  - test_final_elements_match_state : verify the reported elements describe the final state
  - test_printed_lines           : verify the wall-clock line precedes the state, numerical first

Usage:
------
  python -m pytest orbit_comparator/validation/test_propagator.py -v
"""
import pytest
import numpy as np

pytest.importorskip("orekit_jpype")

from orbit_comparator.input.configuration       import build_config
from orbit_comparator.model.environment         import build_environment
from orbit_comparator.validation.orbit_converter import OrbitConverter
from orbit_comparator.propagation.propagator    import DSST_PROPAGATOR_NAME, NUMERICAL_PROPAGATOR_NAME, run_propagations


def run_two_body(data_context, raw_inputs):
  config      = build_config(raw_inputs)
  environment = build_environment(config, data_context)
  result_numerical, result_dsst = run_propagations(config, environment)
  return environment, result_numerical, result_dsst


def initial_pv(initial_orbit):
  pv_coordinates = initial_orbit.getPVCoordinates()
  position       = pv_coordinates.getPosition()
  velocity       = pv_coordinates.getVelocity()
  pos_vec        = np.array([position.getX(), position.getY(), position.getZ()])
  vel_vec        = np.array([velocity.getX(), velocity.getY(), velocity.getZ()])
  return pos_vec, vel_vec


class TestTwoBodyAgreement:

  def test_matches_closed_form(self, data_context, two_body_raw_inputs):
    environment, result_numerical, result_dsst = run_two_body(data_context, two_body_raw_inputs)

    pos_vec_o, vel_vec_o = initial_pv(environment.initial_orbit)
    pos_vec_f, _         = OrbitConverter.propagate_two_body(pos_vec_o, vel_vec_o, 86400.0, environment.mu)

    assert np.linalg.norm(result_numerical['pos_vec'] - pos_vec_f) < 1.0
    assert np.linalg.norm(result_dsst['pos_vec']      - pos_vec_f) < 1.0

  def test_zero_duration(self, data_context, two_body_raw_inputs):
    two_body_raw_inputs['propagationDuration'] = 0.0
    environment, result_numerical, result_dsst = run_two_body(data_context, two_body_raw_inputs)

    pos_vec_o, vel_vec_o = initial_pv(environment.initial_orbit)
    for result in (result_numerical, result_dsst):
      assert np.linalg.norm(result['pos_vec'] - pos_vec_o) < 1.0e-3
      assert np.linalg.norm(result['vel_vec'] - vel_vec_o) < 1.0e-6


class TestTwoBodyIntegrals:

  def test_specific_energy(self, data_context, two_body_raw_inputs):
    environment, result_numerical, result_dsst = run_two_body(data_context, two_body_raw_inputs)

    pos_vec_o, vel_vec_o = initial_pv(environment.initial_orbit)
    energy_o             = OrbitConverter.pv_to_specific_energy(pos_vec_o, vel_vec_o, environment.mu)
    for result in (result_numerical, result_dsst):
      energy_f = OrbitConverter.pv_to_specific_energy(result['pos_vec'], result['vel_vec'], environment.mu)
      assert abs(energy_f - energy_o) / abs(energy_o) < 1.0e-8

  def test_angular_momentum(self, data_context, two_body_raw_inputs):
    environment, result_numerical, result_dsst = run_two_body(data_context, two_body_raw_inputs)

    pos_vec_o, vel_vec_o = initial_pv(environment.initial_orbit)
    ang_mom_vec_o        = OrbitConverter.pv_to_ang_mom_vec(pos_vec_o, vel_vec_o)
    for result in (result_numerical, result_dsst):
      ang_mom_vec_f = OrbitConverter.pv_to_ang_mom_vec(result['pos_vec'], result['vel_vec'])
      assert np.linalg.norm(ang_mom_vec_f - ang_mom_vec_o) / np.linalg.norm(ang_mom_vec_o) < 1.0e-8


class TestRunOutput:

  def test_result_keys(self, data_context, two_body_raw_inputs):
    two_body_raw_inputs['propagationDuration'] = 0.01
    _, result_numerical, result_dsst = run_two_body(data_context, two_body_raw_inputs)

    expected_keys = {'success', 'name', 'state', 'wall_clock_s', 'pos_vec', 'vel_vec', 'coe'}
    assert set(result_numerical.keys()) == expected_keys
    assert set(result_dsst.keys())      == expected_keys
    assert result_numerical['name'] == NUMERICAL_PROPAGATOR_NAME
    assert result_dsst['name']      == DSST_PROPAGATOR_NAME
    assert result_numerical['wall_clock_s'] >= 0.0
    assert result_dsst['coe']['sma'] == pytest.approx(7000000.0, abs=1.0e3)

  def test_final_elements_match_state(self, data_context, two_body_raw_inputs):
    environment, result_numerical, result_dsst = run_two_body(data_context, two_body_raw_inputs)

    for result in (result_numerical, result_dsst):
      coe_reference = OrbitConverter.pv_to_coe(result['pos_vec'], result['vel_vec'], environment.mu)
      assert result['coe']['sma'] == pytest.approx(coe_reference['sma'], rel=1.0e-12)
      assert result['coe']['ecc'] == pytest.approx(coe_reference['ecc'], abs=1.0e-12)
      assert result['coe']['inc'] == pytest.approx(coe_reference['inc'], abs=1.0e-12)

  def test_printed_lines(self, data_context, two_body_raw_inputs, capsys):
    two_body_raw_inputs['propagationDuration'] = 0.01
    _, result_numerical, result_dsst = run_two_body(data_context, two_body_raw_inputs)
    output = capsys.readouterr().out

    numerical_index = output.index("Numerical wall clock run time (s): ")
    dsst_index      = output.index("DSST wall clock run time (s): ")
    assert numerical_index < dsst_index
    assert output.index(str(result_numerical['state']), numerical_index) < dsst_index
    assert output.index(str(result_dsst['state']),      dsst_index) > dsst_index
