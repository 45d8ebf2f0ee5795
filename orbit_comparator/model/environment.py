"""
Physical Environment
====================

Materializes the physical environment shared by both propagators: the central
body ellipsoid, the normalized and unnormalized spherical harmonics providers
of the gravity field, and the initial orbit.

Both gravity providers come from the same coefficient file truncated at the
same (degree, order), and the initial orbit is built with the μ of that file,
so short-period terms and mean motion stay consistent across propagators.
"""
from dataclasses import dataclass
from datetime    import datetime

from orbit_comparator.model.orekit_context import start_orekit_vm
from orbit_comparator.model.constants      import CONVERTER
from orbit_comparator.input.configuration  import (
  CentralBodyConfiguration,
  ComparatorInputs,
  CartesianOrbitConfiguration,
  CircularOrbitConfiguration,
  EquinoctialOrbitConfiguration,
  GravityConfiguration,
  KeplerianOrbitConfiguration,
  OrbitConfiguration,
  TleConfiguration,
)

start_orekit_vm()

from org.hipparchus.geometry.euclidean.threed import Vector3D
from org.orekit.bodies                        import OneAxisEllipsoid
from org.orekit.data                          import DataContext
from org.orekit.forces.gravity.potential      import NormalizedSphericalHarmonicsProvider, UnnormalizedSphericalHarmonicsProvider
from org.orekit.frames                        import Frame, Predefined
from org.orekit.orbits                        import CartesianOrbit, CircularOrbit, EquinoctialOrbit, KeplerianOrbit, Orbit, PositionAngleType
from org.orekit.propagation                   import Propagator
from org.orekit.propagation.analytical.tle    import TLE, TLEPropagator
from org.orekit.time                          import AbsoluteDate, TimeScale
from org.orekit.utils                         import Constants, IERSConventions, PVCoordinates


@dataclass(frozen=True)
class Environment:
  central_body               : OneAxisEllipsoid
  normalized_gravity_field   : NormalizedSphericalHarmonicsProvider
  unnormalized_gravity_field : UnnormalizedSphericalHarmonicsProvider
  initial_orbit              : Orbit
  data_context               : DataContext

  @property
  def mu(self) -> float:
    return self.normalized_gravity_field.getMu()


# =============================================================================
# Frames
# =============================================================================

def get_iers_conventions(
  iers_convention_year : int,
) -> IERSConventions:
  """
  Map a convention year (1996, 2003, 2010) to the IERS conventions enum.
  """
  return IERSConventions.valueOf(f"IERS_{iers_convention_year}")


def _find_predefined_frame(
  frame_name : str,
) -> Predefined:
  """
  Look up a predefined frame by its display name or by its enum constant name.

  Raises:
  -------
    ValueError
      If no predefined frame matches.
  """
  for predefined in Predefined.values():
    if frame_name == str(predefined.getName()) or frame_name == str(predefined.name()):
      return predefined
  raise ValueError(f"Unknown frame: {frame_name}")


def resolve_earth_frame(
  frame_name   : str,
  data_context : DataContext,
) -> Frame:
  """
  Resolve the Earth-fixed frame of the central body.

  Input:
  ------
    frame_name : str
      Name of a predefined frame. Only ITRF and GTOD frames are accepted.
    data_context : DataContext
      Data context providing the frames.

  Output:
  -------
    frame : Frame
      Earth-fixed frame.

  Raises:
  -------
    ValueError
      If the frame is unknown or not Earth-fixed.
  """
  predefined = _find_predefined_frame(frame_name)
  if not (str(predefined.name()).startswith('ITRF') or str(predefined.name()).startswith('GTOD')):
    raise ValueError(f"No Earth frame: {frame_name}")
  return data_context.getFrames().getFrame(predefined)


def resolve_inertial_frame(
  frame_name   : str,
  data_context : DataContext,
) -> Frame:
  """
  Resolve the pseudo-inertial frame of the initial orbit.

  Raises:
  -------
    ValueError
      If the frame is unknown or not pseudo-inertial.
  """
  predefined = _find_predefined_frame(frame_name)
  frame      = data_context.getFrames().getFrame(predefined)
  if not frame.isPseudoInertial():
    raise ValueError(f"Non pseudo-inertial frame: {frame_name}")
  return frame


# =============================================================================
# Central Body and Gravity Field
# =============================================================================

def build_central_body(
  body_config  : CentralBodyConfiguration,
  data_context : DataContext,
) -> OneAxisEllipsoid:
  """
  Build the central body ellipsoid.

  Input:
  ------
    body_config : CentralBodyConfiguration
      Central body configuration. Unset values select WGS84 and ITRF.
    data_context : DataContext
      Data context providing the frames.

  Output:
  -------
    central_body : OneAxisEllipsoid
      Rotating one-axis ellipsoid.
  """
  # Body frame
  if body_config.frame_name is not None:
    body_frame = resolve_earth_frame(body_config.frame_name, data_context)
  else:
    body_frame = data_context.getFrames().getITRF(get_iers_conventions(body_config.iers_convention_year), True)

  # Equatorial radius
  if body_config.equatorial_radius is not None:
    equatorial_radius = body_config.equatorial_radius
  else:
    equatorial_radius = Constants.WGS84_EARTH_EQUATORIAL_RADIUS

  # Flattening
  if body_config.inverse_flattening is not None:
    flattening = 1.0 / body_config.inverse_flattening
  else:
    flattening = Constants.WGS84_EARTH_FLATTENING

  print("\nCentral Body")
  print(f"  Equatorial Radius : {equatorial_radius} m")
  print(f"  Flattening        : {flattening}")
  print(f"  Body Frame        : {body_frame.getName()}")

  return OneAxisEllipsoid(equatorial_radius, flattening, body_frame)


def build_gravity_fields(
  gravity_config : GravityConfiguration,
  data_context   : DataContext,
) -> tuple[NormalizedSphericalHarmonicsProvider, UnnormalizedSphericalHarmonicsProvider]:
  """
  Build the normalized and unnormalized providers of the gravity field.

  Both are read from the same coefficient file and truncated at
  (degree, min(degree, order)).

  Input:
  ------
    gravity_config : GravityConfiguration
      Requested degree and order.
    data_context : DataContext
      Data context providing the gravity fields.

  Output:
  -------
    normalized_gravity_field : NormalizedSphericalHarmonicsProvider
      Provider consumed by the Holmes-Featherstone model.
    unnormalized_gravity_field : UnnormalizedSphericalHarmonicsProvider
      Provider consumed by the DSST zonal and tesseral contributions.
  """
  degree = gravity_config.degree
  order  = gravity_config.clamped_order

  gravity_fields             = data_context.getGravityFields()
  normalized_gravity_field   = gravity_fields.getNormalizedProvider(degree, order)
  unnormalized_gravity_field = gravity_fields.getUnnormalizedProvider(degree, order)

  print("\nGravity Field")
  print(f"  Degree      : {normalized_gravity_field.getMaxDegree()}")
  print(f"  Order       : {normalized_gravity_field.getMaxOrder()}")
  print(f"  Mu          : {normalized_gravity_field.getMu()} m³/s²")
  print(f"  Ae          : {normalized_gravity_field.getAe()} m")
  print(f"  Tide System : {normalized_gravity_field.getTideSystem()}")

  return normalized_gravity_field, unnormalized_gravity_field


# =============================================================================
# Initial Orbit
# =============================================================================

def to_absolute_date(
  date_dt : datetime,
  utc     : TimeScale,
) -> AbsoluteDate:
  """
  Convert a naive UTC datetime into an absolute date.
  """
  return AbsoluteDate(
    date_dt.year,
    date_dt.month,
    date_dt.day,
    date_dt.hour,
    date_dt.minute,
    date_dt.second + date_dt.microsecond * 1.0e-6,
    utc,
  )


def build_initial_orbit(
  orbit_config : OrbitConfiguration,
  mu           : float,
  data_context : DataContext,
) -> Orbit:
  """
  Build the initial orbit in the requested parameterization and frame.

  Input:
  ------
    orbit_config : OrbitConfiguration | None
      Initial orbit configuration.
    mu : float
      Central attraction coefficient of the gravity field [m³/s²].
    data_context : DataContext
      Data context providing frames and time scales.

  Output:
  -------
    orbit : Orbit
      Initial orbit. A TLE is turned into a Cartesian orbit at the TLE epoch.

  Raises:
  -------
    ValueError
      If the orbit is missing or its frame is unknown or not pseudo-inertial.
  """
  if orbit_config is None:
    raise ValueError("Orbit must be defined!")

  frame    = resolve_inertial_frame(orbit_config.frame_name, data_context)
  elements = orbit_config.elements
  utc      = data_context.getTimeScales().getUTC()

  if isinstance(elements, TleConfiguration):
    # SGP4/SDP4 initial state, from TEME into the orbit frame
    frames         = data_context.getFrames()
    tle            = TLE(elements.line_1, elements.line_2, utc)
    tle_propagator = TLEPropagator.selectExtrapolator(tle, Propagator.getDefaultLaw(frames), Propagator.DEFAULT_MASS, frames.getTEME())
    pv_coordinates = tle_propagator.getInitialState().getPVCoordinates(frame)
    return CartesianOrbit(pv_coordinates, frame, tle.getDate(), mu)

  date = to_absolute_date(orbit_config.date, utc)

  if isinstance(elements, KeplerianOrbitConfiguration):
    return KeplerianOrbit(
      elements.a,
      elements.e,
      elements.i    * CONVERTER.RAD_PER_DEG,
      elements.pa   * CONVERTER.RAD_PER_DEG,
      elements.raan * CONVERTER.RAD_PER_DEG,
      elements.v    * CONVERTER.RAD_PER_DEG,
      PositionAngleType.valueOf(elements.position_angle),
      frame,
      date,
      mu,
    )

  if isinstance(elements, EquinoctialOrbitConfiguration):
    return EquinoctialOrbit(
      elements.a,
      elements.ex,
      elements.ey,
      elements.hx,
      elements.hy,
      elements.lv * CONVERTER.RAD_PER_DEG,
      PositionAngleType.valueOf(elements.position_angle),
      frame,
      date,
      mu,
    )

  if isinstance(elements, CircularOrbitConfiguration):
    return CircularOrbit(
      elements.a,
      elements.ex,
      elements.ey,
      elements.i       * CONVERTER.RAD_PER_DEG,
      elements.raan    * CONVERTER.RAD_PER_DEG,
      elements.alpha_v * CONVERTER.RAD_PER_DEG,
      PositionAngleType.valueOf(elements.position_angle),
      frame,
      date,
      mu,
    )

  if isinstance(elements, CartesianOrbitConfiguration):
    pv_coordinates = PVCoordinates(
      Vector3D(float(elements.x),  float(elements.y),  float(elements.z)),
      Vector3D(float(elements.vx), float(elements.vy), float(elements.vz)),
    )
    return CartesianOrbit(pv_coordinates, frame, date, mu)

  raise ValueError(f"Unsupported orbit elements: {type(elements).__name__}")


def build_environment(
  config       : ComparatorInputs,
  data_context : DataContext,
) -> Environment:
  """
  Build the central body, both gravity providers and the initial orbit.

  Input:
  ------
    config : ComparatorInputs
      Parsed configuration.
    data_context : DataContext
      Data context providing frames, time scales and gravity fields.

  Output:
  -------
    environment : Environment
      Shared physical environment of both propagators.
  """
  central_body = build_central_body(config.body, data_context)

  normalized_gravity_field, unnormalized_gravity_field = build_gravity_fields(
    config.force_models.gravity,
    data_context,
  )

  initial_orbit = build_initial_orbit(
    config.orbit,
    normalized_gravity_field.getMu(),
    data_context,
  )

  print("\nInitial Orbit")
  print(f"  Frame : {initial_orbit.getFrame().getName()}")
  print(f"  Orbit : {initial_orbit}")

  return Environment(
    central_body               = central_body,
    normalized_gravity_field   = normalized_gravity_field,
    unnormalized_gravity_field = unnormalized_gravity_field,
    initial_orbit              = initial_orbit,
    data_context               = data_context,
  )
