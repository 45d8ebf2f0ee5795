from orbit_comparator.model.orekit_context import start_orekit_vm
from orbit_comparator.model.force_catalog  import ForceCatalog
from orbit_comparator.model.constants      import DEFAULTS

start_orekit_vm()

from org.hipparchus.ode                         import ODEIntegrator
from org.orekit.data                            import DataContext
from org.orekit.orbits                          import Orbit
from org.orekit.propagation                     import PropagationType, Propagator, SpacecraftState
from org.orekit.propagation.semianalytical.dsst import DSSTPropagator


def build_dsst_propagator(
  integrator    : ODEIntegrator,
  force_catalog : ForceCatalog,
  initial_orbit : Orbit,
  data_context  : DataContext,
  max_time_gap  : float = DEFAULTS.DSST_INTERPOLATION_MAX_TIME_GAP,
) -> DSSTPropagator:
  """
  Assemble the DSST (semi-analytical) propagator.

  Mean elements are integrated internally; states are exported as osculating
  elements, rebuilt from short-period terms resampled on an interpolation grid.

  Input:
  ------
    integrator : ODEIntegrator
      Integrator owned by this propagator.
    force_catalog : ForceCatalog
      Shared force-model inputs.
    initial_orbit : Orbit
      Initial orbit, taken as osculating.
    data_context : DataContext
      Data context providing the frame of the default attitude law.
    max_time_gap : float
      Maximum gap of the short-period interpolation grid [s].

  Output:
  -------
    propagator : DSSTPropagator
      Propagator ready to run.
  """
  propagator = DSSTPropagator(integrator, PropagationType.OSCULATING, Propagator.getDefaultLaw(data_context.getFrames()))

  for force_model in force_catalog.as_dsst():
    propagator.addForceModel(force_model)

  propagator.setInitialState(SpacecraftState(initial_orbit), PropagationType.OSCULATING)
  propagator.setInterpolationGridToMaxTimeGap(float(max_time_gap))
  return propagator
