"""
Unit Tests for the Integrator Builder
=====================================

Tests:
------
TestIntegratorSelection
  - test_fixed_step_selects_rk4          : verify classical Runge-Kutta 4 with the configured step
  - test_adaptive_selects_dormand_prince : verify Dormand-Prince 8(5,3) with the configured step range
  - test_missing_settings_rejected       : verify "Integrator shall be defined for"

TestTolerances
  - test_equinoctial_tolerance_mapping   : verify the mapping matches the equinoctial tolerances
  - test_tolerances_scale_with_error     : verify tighter targets give tighter tolerances

Usage:
------
  python -m pytest orbit_comparator/validation/test_integrator.py -v
"""
import pytest

pytest.importorskip("orekit_jpype")

from orbit_comparator.input.configuration import AdaptiveStepIntegratorSettings, FixedStepIntegratorSettings, build_config
from orbit_comparator.model.environment   import build_environment
from orbit_comparator.model.integrator    import build_integrator, compute_tolerances

from org.hipparchus.ode.nonstiff       import ClassicalRungeKuttaIntegrator, DormandPrince853Integrator
from org.orekit.orbits                 import OrbitType
from org.orekit.propagation.numerical import NumericalPropagator


@pytest.fixture(scope="module")
def initial_orbit(data_context):
  raw_inputs = {
    'propagationDuration' : 1.0,
    'orbit' : {
      'date'      : '2023-01-01T00:00:00',
      'orbitType' : {'keplerian': {'a': 7.0e6, 'e': 1.0e-3, 'i': 51.6}},
    },
  }
  return build_environment(build_config(raw_inputs), data_context).initial_orbit


class TestIntegratorSelection:

  def test_fixed_step_selects_rk4(self, initial_orbit):
    integrator = build_integrator(FixedStepIntegratorSettings(step=60.0), initial_orbit, 'numerical propagator')
    assert isinstance(integrator, ClassicalRungeKuttaIntegrator)
    assert integrator.getDefaultStep() == 60.0

  def test_adaptive_selects_dormand_prince(self, initial_orbit):
    settings   = AdaptiveStepIntegratorSettings(min_step=0.001, max_step=300.0, position_error=1.0e-3)
    integrator = build_integrator(settings, initial_orbit, 'DSST propagator')
    assert isinstance(integrator, DormandPrince853Integrator)
    assert integrator.getMinStep() == 0.001
    assert integrator.getMaxStep() == 300.0

  @pytest.mark.parametrize("propagator_name", ['numerical propagator', 'DSST propagator'])
  def test_missing_settings_rejected(self, initial_orbit, propagator_name):
    with pytest.raises(ValueError, match=f"Integrator shall be defined for: {propagator_name}"):
      build_integrator(None, initial_orbit, propagator_name)


class TestTolerances:

  def test_equinoctial_tolerance_mapping(self, initial_orbit):
    absolute_tolerance, relative_tolerance = compute_tolerances(1.0e-3, initial_orbit)
    expected = NumericalPropagator.tolerances(1.0e-3, initial_orbit, OrbitType.EQUINOCTIAL)

    assert list(absolute_tolerance) == list(expected[0])
    assert list(relative_tolerance) == list(expected[1])
    assert len(absolute_tolerance) >= 6
    assert all(tolerance > 0.0 for tolerance in absolute_tolerance)

  def test_tolerances_scale_with_error(self, initial_orbit):
    absolute_tolerance_tight, _ = compute_tolerances(1.0e-3, initial_orbit)
    absolute_tolerance_loose, _ = compute_tolerances(10.0,   initial_orbit)
    for tight, loose in zip(list(absolute_tolerance_tight)[:6], list(absolute_tolerance_loose)[:6]):
      assert tight < loose
