from orbit_comparator.model.orekit_context import start_orekit_vm
from orbit_comparator.model.force_catalog  import ForceCatalog

start_orekit_vm()

from org.hipparchus.ode               import ODEIntegrator
from org.orekit.data                  import DataContext
from org.orekit.orbits                import Orbit, OrbitType
from org.orekit.propagation           import Propagator, SpacecraftState
from org.orekit.propagation.numerical import NumericalPropagator


def build_numerical_propagator(
  integrator    : ODEIntegrator,
  force_catalog : ForceCatalog,
  initial_orbit : Orbit,
  data_context  : DataContext,
) -> NumericalPropagator:
  """
  Assemble the numerical (Cowell) propagator.

  The state is integrated in equinoctial elements. Force models are added in
  the order of ForceCatalog.as_numerical(), Newtonian attraction last.

  Input:
  ------
    integrator : ODEIntegrator
      Integrator owned by this propagator.
    force_catalog : ForceCatalog
      Shared force-model inputs.
    initial_orbit : Orbit
      Initial orbit, wrapped in a spacecraft state of default mass.
    data_context : DataContext
      Data context providing the frame of the default attitude law.

  Output:
  -------
    propagator : NumericalPropagator
      Propagator ready to run.
  """
  propagator = NumericalPropagator(integrator, Propagator.getDefaultLaw(data_context.getFrames()))
  propagator.setOrbitType(OrbitType.EQUINOCTIAL)

  for force_model in force_catalog.as_numerical():
    propagator.addForceModel(force_model)

  propagator.setInitialState(SpacecraftState(initial_orbit))
  return propagator
