"""
Propagation Driver
==================

Builds both propagators around the shared environment and runs them one after
the other over the same duration, timing each run with the wall clock.
"""
import time
import numpy as np

from orbit_comparator.model.orekit_context  import start_orekit_vm
from orbit_comparator.model.environment     import Environment
from orbit_comparator.model.force_catalog   import ForceCatalog
from orbit_comparator.model.integrator      import build_integrator
from orbit_comparator.input.configuration   import ComparatorInputs
from orbit_comparator.propagation.numerical import build_numerical_propagator
from orbit_comparator.propagation.dsst      import build_dsst_propagator
from orbit_comparator.utility.printer       import print_propagation_result
from orbit_comparator.utility.time_helper   import format_time_offset

start_orekit_vm()

from org.orekit.orbits      import KeplerianOrbit, Orbit
from org.orekit.propagation import Propagator, SpacecraftState

NUMERICAL_PROPAGATOR_NAME = 'numerical propagator'
DSST_PROPAGATOR_NAME      = 'DSST propagator'


def orbit_to_coe(
  orbit : Orbit,
) -> dict:
  """
  Classical elements of an orbit, read through its Keplerian conversion.

  Output:
  -------
    coe : dict
      sma [m], ecc [-], inc, raan, aop, ta, ea and ma [rad].
  """
  keplerian_orbit = KeplerianOrbit(orbit)
  return {
    'sma'  : keplerian_orbit.getA(),
    'ecc'  : keplerian_orbit.getE(),
    'inc'  : keplerian_orbit.getI(),
    'raan' : keplerian_orbit.getRightAscensionOfAscendingNode(),
    'aop'  : keplerian_orbit.getPerigeeArgument(),
    'ta'   : keplerian_orbit.getTrueAnomaly(),
    'ea'   : keplerian_orbit.getEccentricAnomaly(),
    'ma'   : keplerian_orbit.getMeanAnomaly(),
  }


def state_to_result(
  name         : str,
  state        : SpacecraftState,
  wall_clock_s : float,
  frame        : object,
) -> dict:
  """
  Package a final state into a result dictionary.

  Input:
  ------
    name : str
      Propagator name.
    state : SpacecraftState
      Final state.
    wall_clock_s : float
      Elapsed wall-clock time [s].
    frame : Frame
      Frame of the position and velocity vectors (the initial orbit frame).

  Output:
  -------
    result : dict
      success, name, state, wall_clock_s, pos_vec [m], vel_vec [m/s] and coe.
  """
  pv_coordinates = state.getPVCoordinates(frame)
  position       = pv_coordinates.getPosition()
  velocity       = pv_coordinates.getVelocity()

  pos_vec = np.array([position.getX(), position.getY(), position.getZ()])
  vel_vec = np.array([velocity.getX(), velocity.getY(), velocity.getZ()])

  return {
    'success'      : True,
    'name'         : name,
    'state'        : state,
    'wall_clock_s' : wall_clock_s,
    'pos_vec'      : pos_vec,
    'vel_vec'      : vel_vec,
    'coe'          : orbit_to_coe(state.getOrbit()),
  }


def run_propagation(
  propagator    : Propagator,
  name          : str,
  label         : str,
  initial_orbit : Orbit,
  duration_s    : float,
) -> dict:
  """
  Propagate from the initial orbit epoch over a duration and time the run.

  Input:
  ------
    propagator : Propagator
      Assembled propagator.
    name : str
      Propagator name (result key).
    label : str
      Label of the printed wall-clock line.
    initial_orbit : Orbit
      Initial orbit, giving the start epoch and the output frame.
    duration_s : float
      Propagation duration [s].

  Output:
  -------
    result : dict
      Result dictionary, see state_to_result.
  """
  target_date = initial_orbit.getDate().shiftedBy(float(duration_s))

  print(f"\nPropagate ({name})")
  print(f"  Duration : {format_time_offset(duration_s)}")

  time_start   = time.perf_counter()
  state        = propagator.propagate(target_date)
  wall_clock_s = time.perf_counter() - time_start

  print_propagation_result(label, wall_clock_s, state)

  return state_to_result(
    name         = name,
    state        = state,
    wall_clock_s = wall_clock_s,
    frame        = initial_orbit.getFrame(),
  )


def run_propagations(
  config      : ComparatorInputs,
  environment : Environment,
) -> tuple[dict, dict]:
  """
  Build and run the numerical and DSST propagators.

  Both integrators are built before either propagation starts, so a missing
  integrator section fails the run before any propagation.

  Input:
  ------
    config : ComparatorInputs
      Parsed configuration.
    environment : Environment
      Shared central body, gravity providers and initial orbit.

  Output:
  -------
    result_numerical : dict
      Numerical propagation result.
    result_dsst : dict
      DSST propagation result.
  """
  initial_orbit = environment.initial_orbit

  # Integrators
  numerical_integrator = build_integrator(config.numerical_integrator, initial_orbit, NUMERICAL_PROPAGATOR_NAME)
  dsst_integrator      = build_integrator(config.dsst_integrator,      initial_orbit, DSST_PROPAGATOR_NAME)

  # Propagators
  force_catalog        = ForceCatalog(config.force_models, environment)
  numerical_propagator = build_numerical_propagator(
    integrator    = numerical_integrator,
    force_catalog = force_catalog,
    initial_orbit = initial_orbit,
    data_context  = environment.data_context,
  )
  dsst_propagator = build_dsst_propagator(
    integrator    = dsst_integrator,
    force_catalog = force_catalog,
    initial_orbit = initial_orbit,
    data_context  = environment.data_context,
    max_time_gap  = config.dsst_interpolation_max_time_gap,
  )

  # Sequential runs
  result_numerical = run_propagation(
    propagator    = numerical_propagator,
    name          = NUMERICAL_PROPAGATOR_NAME,
    label         = 'Numerical',
    initial_orbit = initial_orbit,
    duration_s    = config.propagation_duration_s,
  )
  result_dsst = run_propagation(
    propagator    = dsst_propagator,
    name          = DSST_PROPAGATOR_NAME,
    label         = 'DSST',
    initial_orbit = initial_orbit,
    duration_s    = config.propagation_duration_s,
  )

  return result_numerical, result_dsst
