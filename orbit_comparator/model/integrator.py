"""
Integrator Builder
==================

One ODE integrator per propagator:
  - FixedStepIntegratorSettings    -> classical Runge-Kutta 4 with that step
  - AdaptiveStepIntegratorSettings -> Dormand-Prince 8(5,3), tolerances mapped
                                      from a position error target through the
                                      equinoctial elements of the initial orbit
"""
from typing import Optional

from orbit_comparator.model.orekit_context import start_orekit_vm
from orbit_comparator.input.configuration  import (
  AdaptiveStepIntegratorSettings,
  FixedStepIntegratorSettings,
  IntegratorSettings,
)

start_orekit_vm()

from org.hipparchus.ode               import ODEIntegrator
from org.hipparchus.ode.nonstiff      import ClassicalRungeKuttaIntegrator, DormandPrince853Integrator
from org.orekit.orbits                import Orbit, OrbitType
from org.orekit.propagation.numerical import NumericalPropagator


def compute_tolerances(
  position_error : float,
  initial_orbit  : Orbit,
) -> tuple:
  """
  Map a position error target onto the six equinoctial elements (plus mass).

  Input:
  ------
    position_error : float
      Target position error [m].
    initial_orbit : Orbit
      Orbit setting the local magnitudes of the mapping.

  Output:
  -------
    absolute_tolerance : JArray(JDouble)
      Absolute tolerance per state component.
    relative_tolerance : JArray(JDouble)
      Relative tolerance per state component.
  """
  tolerances = NumericalPropagator.tolerances(float(position_error), initial_orbit, OrbitType.EQUINOCTIAL)
  return tolerances[0], tolerances[1]


def build_integrator(
  settings        : Optional[IntegratorSettings],
  initial_orbit   : Orbit,
  propagator_name : str,
) -> ODEIntegrator:
  """
  Build the ODE integrator of one propagator.

  Input:
  ------
    settings : IntegratorSettings | None
      Fixed or adaptive step settings.
    initial_orbit : Orbit
      Initial orbit, used for the tolerance mapping of adaptive integrators.
    propagator_name : str
      Name of the propagator, used in the error message.

  Output:
  -------
    integrator : ODEIntegrator
      ClassicalRungeKuttaIntegrator or DormandPrince853Integrator.

  Raises:
  -------
    ValueError
      If the settings are missing.
  """
  if settings is None:
    raise ValueError(f"Integrator shall be defined for: {propagator_name}")

  print(f"\nIntegrator ({propagator_name})")

  if isinstance(settings, FixedStepIntegratorSettings):
    print(f"  Type     : Classical Runge-Kutta 4")
    print(f"  Step     : {settings.step} s")
    return ClassicalRungeKuttaIntegrator(float(settings.step))

  if isinstance(settings, AdaptiveStepIntegratorSettings):
    absolute_tolerance, relative_tolerance = compute_tolerances(settings.position_error, initial_orbit)
    print(f"  Type     : Dormand-Prince 8(5,3)")
    print(f"  Min Step : {settings.min_step} s")
    print(f"  Max Step : {settings.max_step} s")
    print(f"  Pos Err  : {settings.position_error} m")
    return DormandPrince853Integrator(
      float(settings.min_step),
      float(settings.max_step),
      absolute_tolerance,
      relative_tolerance,
    )

  raise ValueError(f"Unsupported integrator settings for {propagator_name}: {type(settings).__name__}")
