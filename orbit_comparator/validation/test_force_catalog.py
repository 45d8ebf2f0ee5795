"""
Unit Tests for the Force Catalog
================================

Tests for the numerical and DSST force stacks built from one shared catalog.

Tests:
------
TestNumericalForceModels
  - test_two_body_stack          : verify only the Newtonian attraction is added
  - test_full_stack_order        : verify drag, third bodies, tides, SRP, harmonics, Newtonian
  - test_relativity_before_newtonian : verify the optional relativity term
  - test_solid_tides_activation  : verify tides iff a third body requests them

TestDsstForceModels
  - test_two_body_stack          : verify only the DSST Newtonian attraction is added
  - test_full_stack_order        : verify drag, SRP, third bodies, tesseral, zonal, Newtonian
  - test_no_relativity_counterpart : verify relativity is numerical only

TestSharedInputs
  - test_mu_consistency          : verify orbit, gravity field and force models share μ
  - test_adapters_build_new_models : verify the propagators never share a force model

Usage:
------
  python -m pytest orbit_comparator/validation/test_force_catalog.py -v
"""
import pytest

pytest.importorskip("orekit_jpype")

from orbit_comparator.input.configuration import build_config
from orbit_comparator.model.environment   import build_environment
from orbit_comparator.model.force_catalog import ForceCatalog

from org.orekit.forces.gravity                         import NewtonianAttraction, Relativity, SolidTides
from org.orekit.propagation.semianalytical.dsst.forces import DSSTNewtonianAttraction

CENTRAL_ATTRACTION_COEFFICIENT = 'central attraction coefficient'


def build_catalog(data_context, raw_inputs):
  config      = build_config(raw_inputs)
  environment = build_environment(config, data_context)
  return ForceCatalog(config.force_models, environment), environment


def class_names(force_models):
  return [str(force_model.getClass().getSimpleName()) for force_model in force_models]


@pytest.fixture
def full_force_raw_inputs(two_body_raw_inputs):
  two_body_raw_inputs['forceModels'] = {
    'gravity'                : {'degree': 4, 'order': 4},
    'thirdBody'              : [{'name': 'Sun', 'withSolidTides': True}, {'name': 'Moon'}],
    'drag'                   : {'area': 1.0, 'cd': 2.2},
    'solarRadiationPressure' : {'area': 1.0, 'cr': 1.5},
  }
  return two_body_raw_inputs


class TestNumericalForceModels:

  def test_two_body_stack(self, data_context, two_body_raw_inputs):
    catalog, _   = build_catalog(data_context, two_body_raw_inputs)
    force_models = catalog.as_numerical()
    assert len(force_models) == 1
    assert isinstance(force_models[0], NewtonianAttraction)

  def test_full_stack_order(self, data_context, full_force_raw_inputs):
    catalog, _ = build_catalog(data_context, full_force_raw_inputs)
    assert class_names(catalog.as_numerical()) == [
      'DragForce',
      'ThirdBodyAttraction',
      'ThirdBodyAttraction',
      'SolidTides',
      'SolarRadiationPressure',
      'HolmesFeatherstoneAttractionModel',
      'NewtonianAttraction',
    ]

  def test_relativity_before_newtonian(self, data_context, two_body_raw_inputs):
    two_body_raw_inputs['forceModels']['relativity'] = {'isUsed': True}
    catalog, _   = build_catalog(data_context, two_body_raw_inputs)
    force_models = catalog.as_numerical()
    assert isinstance(force_models[-2], Relativity)
    assert isinstance(force_models[-1], NewtonianAttraction)

  @pytest.mark.parametrize("third_bodies, expected_tides", [
    ([],                                                        0),
    ([{'name': 'Sun'}, {'name': 'Moon'}],                       0),
    ([{'name': 'Sun', 'withSolidTides': True}, {'name': 'Moon'}], 1),
    ([{'name': 'Sun', 'withSolidTides': True}, {'name': 'Moon', 'withSolidTides': True}], 1),
  ])
  def test_solid_tides_activation(self, data_context, two_body_raw_inputs, third_bodies, expected_tides):
    two_body_raw_inputs['forceModels']['thirdBody'] = third_bodies
    catalog, _   = build_catalog(data_context, two_body_raw_inputs)
    force_models = catalog.as_numerical()

    assert sum(isinstance(force_model, SolidTides) for force_model in force_models) == expected_tides
    assert catalog.has_solid_tides == (expected_tides == 1)
    assert len(catalog.tide_bodies) == sum(bool(third_body.get('withSolidTides')) for third_body in third_bodies)


class TestDsstForceModels:

  def test_two_body_stack(self, data_context, two_body_raw_inputs):
    catalog, _   = build_catalog(data_context, two_body_raw_inputs)
    force_models = catalog.as_dsst()
    assert len(force_models) == 1
    assert isinstance(force_models[0], DSSTNewtonianAttraction)

  def test_full_stack_order(self, data_context, full_force_raw_inputs):
    catalog, _ = build_catalog(data_context, full_force_raw_inputs)
    assert class_names(catalog.as_dsst()) == [
      'DSSTAtmosphericDrag',
      'DSSTSolarRadiationPressure',
      'DSSTThirdBody',
      'DSSTThirdBody',
      'DSSTTesseral',
      'DSSTZonal',
      'DSSTNewtonianAttraction',
    ]

  def test_no_relativity_counterpart(self, data_context, two_body_raw_inputs):
    two_body_raw_inputs['forceModels']['relativity'] = {'isUsed': True}
    catalog, _ = build_catalog(data_context, two_body_raw_inputs)
    assert class_names(catalog.as_dsst()) == ['DSSTNewtonianAttraction']


class TestSharedInputs:

  def test_mu_consistency(self, data_context, full_force_raw_inputs):
    catalog, environment = build_catalog(data_context, full_force_raw_inputs)
    mu = environment.normalized_gravity_field.getMu()

    assert environment.initial_orbit.getMu() == mu
    assert catalog.mu                        == mu

    checked = 0
    for force_model in catalog.as_numerical() + catalog.as_dsst():
      for driver in force_model.getParametersDrivers():
        if str(driver.getName()) == CENTRAL_ATTRACTION_COEFFICIENT:
          assert driver.getValue() == mu
          checked += 1
    assert checked >= 2

  def test_adapters_build_new_models(self, data_context, two_body_raw_inputs):
    catalog, _ = build_catalog(data_context, two_body_raw_inputs)
    first      = catalog.as_numerical()[-1]
    second     = catalog.as_numerical()[-1]
    assert not first.equals(second)
