"""
Input Configuration
===================

Plain-data description of a comparison run, parsed from the YAML input file.

Summary:
--------
The raw YAML mapping (camelCase keys) is turned into frozen dataclasses:

  ComparatorInputs
  ├── propagation_duration            [day]
  ├── body                            CentralBodyConfiguration
  ├── orbit                           OrbitConfiguration | None
  │   └── elements                    Cartesian | Keplerian | Equinoctial | Circular | Tle
  ├── numerical_integrator            FixedStep | AdaptiveStep | None
  ├── dsst_integrator                 FixedStep | AdaptiveStep | None
  ├── dsst_interpolation_max_time_gap [s]
  └── force_models                    ForceModelConfiguration

Unknown keys are ignored. A missing or null numeric value maps to
DEFAULTS.NULL_DOUBLE. A missing orbit or integrator section is kept as None and
rejected by the builder that needs it.
"""
import math

from dataclasses import dataclass, field
from datetime    import datetime
from typing      import Optional, Union

from orbit_comparator.model.constants     import CONVERTER, DEFAULTS, POSITIONANGLES
from orbit_comparator.utility.time_helper import parse_time
from orbit_comparator.utility.tle_helper  import check_tle_satellite, get_tle_satellite_and_tle_epoch, validate_tle_lines


# =============================================================================
# Central Body
# =============================================================================

@dataclass(frozen=True)
class CentralBodyConfiguration:
  """
  Central body shape. None means "use the WGS84 / ITRF default".
  """
  iers_convention_year : int             = DEFAULTS.IERS_CONVENTION_YEAR
  frame_name           : Optional[str]   = None
  equatorial_radius    : Optional[float] = None  # [m]
  inverse_flattening   : Optional[float] = None


# =============================================================================
# Initial Orbit (tagged variant)
# =============================================================================

@dataclass(frozen=True)
class CartesianOrbitConfiguration:
  x  : float  # [m]
  y  : float  # [m]
  z  : float  # [m]
  vx : float  # [m/s]
  vy : float  # [m/s]
  vz : float  # [m/s]

  @property
  def pos_vec(self) -> tuple:
    return (self.x, self.y, self.z)

  @property
  def vel_vec(self) -> tuple:
    return (self.vx, self.vy, self.vz)


@dataclass(frozen=True)
class KeplerianOrbitConfiguration:
  a              : float  # [m]
  e              : float
  i              : float  # [deg]
  pa             : float  # [deg]
  raan           : float  # [deg]
  v              : float  # [deg]
  position_angle : str = DEFAULTS.POSITION_ANGLE


@dataclass(frozen=True)
class EquinoctialOrbitConfiguration:
  a              : float  # [m]
  ex             : float
  ey             : float
  hx             : float
  hy             : float
  lv             : float  # [deg]
  position_angle : str = DEFAULTS.POSITION_ANGLE


@dataclass(frozen=True)
class CircularOrbitConfiguration:
  a              : float  # [m]
  ex             : float
  ey             : float
  i              : float  # [deg]
  raan           : float  # [deg]
  alpha_v        : float  # [deg]
  position_angle : str = DEFAULTS.POSITION_ANGLE


@dataclass(frozen=True)
class TleConfiguration:
  line_1 : str
  line_2 : str
  epoch  : datetime  # [UTC]


OrbitElements = Union[
  CartesianOrbitConfiguration,
  KeplerianOrbitConfiguration,
  EquinoctialOrbitConfiguration,
  CircularOrbitConfiguration,
  TleConfiguration,
]


@dataclass(frozen=True)
class OrbitConfiguration:
  """
  Initial orbit. `date` is None for a TLE, whose epoch is carried by the element set.
  """
  elements   : OrbitElements
  date       : Optional[datetime] = None  # [UTC]
  frame_name : str                = DEFAULTS.ORBIT_FRAME_NAME
  type_name  : Optional[str]      = None


# =============================================================================
# Integrators (tagged union)
# =============================================================================

@dataclass(frozen=True)
class FixedStepIntegratorSettings:
  step : float  # [s]


@dataclass(frozen=True)
class AdaptiveStepIntegratorSettings:
  min_step       : float  # [s]
  max_step       : float  # [s]
  position_error : float  # [m]


IntegratorSettings = Union[FixedStepIntegratorSettings, AdaptiveStepIntegratorSettings]


# =============================================================================
# Force Models
# =============================================================================

@dataclass(frozen=True)
class GravityConfiguration:
  degree : int = 0
  order  : int = 0

  @property
  def clamped_order(self) -> int:
    """Requested order, clamped to the degree ("full order" sentinel)."""
    return clamp_gravity_order(self.degree, self.order)

  @property
  def is_enabled(self) -> bool:
    return self.degree > 0


@dataclass(frozen=True)
class ThirdBodyConfiguration:
  name             : str
  with_solid_tides : bool = False


@dataclass(frozen=True)
class DragConfiguration:
  area : float  # [m²]
  cd   : float


@dataclass(frozen=True)
class SolarRadiationPressureConfiguration:
  area : float  # [m²]
  cr   : float


@dataclass(frozen=True)
class RelativityConfiguration:
  is_used : bool = False


@dataclass(frozen=True)
class ForceModelConfiguration:
  gravity                  : GravityConfiguration                          = field(default_factory=GravityConfiguration)
  third_bodies             : tuple                                         = ()
  drag                     : Optional[DragConfiguration]                   = None
  solar_radiation_pressure : Optional[SolarRadiationPressureConfiguration] = None
  relativity               : RelativityConfiguration                       = field(default_factory=RelativityConfiguration)

  @property
  def include_solid_tides(self) -> bool:
    return any(third_body.with_solid_tides for third_body in self.third_bodies)


# =============================================================================
# Root
# =============================================================================

@dataclass(frozen=True)
class ComparatorInputs:
  propagation_duration            : float  # [day]
  body                            : CentralBodyConfiguration
  orbit                           : Optional[OrbitConfiguration]
  numerical_integrator            : Optional[IntegratorSettings]
  dsst_integrator                 : Optional[IntegratorSettings]
  force_models                    : ForceModelConfiguration
  dsst_interpolation_max_time_gap : float = DEFAULTS.DSST_INTERPOLATION_MAX_TIME_GAP  # [s]

  @property
  def propagation_duration_s(self) -> float:
    return self.propagation_duration * CONVERTER.SEC_PER_DAY


# =============================================================================
# Parsing
# =============================================================================

def clamp_gravity_order(
  degree : int,
  order  : int,
) -> int:
  """
  Clamp the spherical harmonics order to the degree.

  Input:
  ------
    degree : int
      Maximum degree.
    order : int
      Requested maximum order. Any value >= degree means "full order".

  Output:
  -------
    order : int
      min(degree, order).
  """
  return min(degree, order)


def _get_float(
  block   : dict,
  key     : str,
  context : str,
  default : float = DEFAULTS.NULL_DOUBLE,
) -> float:
  value = block.get(key)
  if value is None:
    return default
  try:
    value = float(value)
  except (TypeError, ValueError):
    raise ValueError(f"{context}.{key} must be a number, got {value!r}")
  if not math.isfinite(value):
    raise ValueError(f"{context}.{key} must be finite, got {value}")
  return value


def _get_required_float(
  block   : dict,
  key     : str,
  context : str,
) -> float:
  if block.get(key) is None:
    raise ValueError(f"{context}.{key} must be defined")
  return _get_float(block, key, context)


def _get_int(
  block   : dict,
  key     : str,
  context : str,
) -> int:
  value = block.get(key)
  if value is None:
    return 0
  if isinstance(value, bool):
    raise ValueError(f"{context}.{key} must be an integer, got {value!r}")
  try:
    int_value = int(value)
  except (TypeError, ValueError, OverflowError):
    raise ValueError(f"{context}.{key} must be an integer, got {value!r}")
  if int_value != value:
    raise ValueError(f"{context}.{key} must be an integer, got {value!r}")
  return int_value


def _get_bool(
  block   : dict,
  key     : str,
  context : str,
  default : bool = False,
) -> bool:
  value = block.get(key)
  if value is None:
    return default
  if not isinstance(value, bool):
    raise ValueError(f"{context}.{key} must be a boolean, got {value!r}")
  return value


def _get_block(
  block   : dict,
  key     : str,
  context : str,
) -> Optional[dict]:
  value = block.get(key)
  if value is None:
    return None
  if not isinstance(value, dict):
    raise ValueError(f"{context}.{key} must be a mapping, got {type(value).__name__}")
  return value


def _parse_position_angle(
  block   : dict,
  context : str,
) -> str:
  name = block.get('positionAngle')
  if name is None:
    return DEFAULTS.POSITION_ANGLE
  name = str(name).upper()
  if name not in POSITIONANGLES.ALL:
    raise ValueError(f"{context}.positionAngle must be one of {', '.join(POSITIONANGLES.ALL)}, got {name}")
  return name


def parse_central_body(
  raw_body : Optional[dict],
) -> CentralBodyConfiguration:
  """
  Parse the `body` block. Zero or missing numeric values select the defaults.
  """
  if raw_body is None:
    return CentralBodyConfiguration()

  iers_convention_year = _get_int(raw_body, 'iersConventionYear', 'body') or DEFAULTS.IERS_CONVENTION_YEAR
  if iers_convention_year not in (1996, 2003, 2010):
    raise ValueError(f"body.iersConventionYear must be 1996, 2003 or 2010, got {iers_convention_year}")

  equatorial_radius  = _get_float(raw_body, 'equatorialRadius', 'body')
  inverse_flattening = _get_float(raw_body, 'inverseFlattening', 'body')
  if equatorial_radius < 0.0:
    raise ValueError(f"body.equatorialRadius must be positive, got {equatorial_radius}")
  if inverse_flattening < 0.0:
    raise ValueError(f"body.inverseFlattening must be positive, got {inverse_flattening}")

  return CentralBodyConfiguration(
    iers_convention_year = iers_convention_year,
    frame_name           = raw_body.get('frameName'),
    equatorial_radius    = equatorial_radius  if equatorial_radius  != DEFAULTS.NULL_DOUBLE else None,
    inverse_flattening   = inverse_flattening if inverse_flattening != DEFAULTS.NULL_DOUBLE else None,
  )


def parse_orbit_elements(
  raw_orbit_type : dict,
) -> OrbitElements:
  """
  Parse the `orbit.orbitType` block into exactly one element set.

  Raises:
  -------
    ValueError
      If no element set, or more than one, is populated, or if an element set
      violates its own invariants.
  """
  populated = [key for key in ('cartesian', 'keplerian', 'equinoctial', 'circular', 'tle') if raw_orbit_type.get(key) is not None]
  if not populated:
    raise ValueError("orbit.orbitType must define one of cartesian, keplerian, equinoctial, circular or tle")
  if len(populated) > 1:
    raise ValueError(f"orbit.orbitType must define exactly one element set, got {', '.join(populated)}")

  key     = populated[0]
  block   = _get_block(raw_orbit_type, key, 'orbit.orbitType')
  context = f"orbit.orbitType.{key}"

  if key == 'keplerian':
    elements = KeplerianOrbitConfiguration(
      a              = _get_required_float(block, 'a', context),
      e              = _get_float(block, 'e',    context),
      i              = _get_float(block, 'i',    context),
      pa             = _get_float(block, 'pa',   context),
      raan           = _get_float(block, 'raan', context),
      v              = _get_float(block, 'v',    context),
      position_angle = _parse_position_angle(block, context),
    )
    if elements.a <= 0.0:
      raise ValueError(f"{context}.a must be positive, got {elements.a}")
    if not 0.0 <= elements.e < 1.0:
      raise ValueError(f"{context}.e must be in [0, 1), got {elements.e}")
    if not 0.0 <= elements.i <= 180.0:
      raise ValueError(f"{context}.i must be in [0, 180] deg, got {elements.i}")
    return elements

  if key == 'equinoctial':
    elements = EquinoctialOrbitConfiguration(
      a              = _get_required_float(block, 'a', context),
      ex             = _get_float(block, 'ex', context),
      ey             = _get_float(block, 'ey', context),
      hx             = _get_float(block, 'hx', context),
      hy             = _get_float(block, 'hy', context),
      lv             = _get_float(block, 'lv', context),
      position_angle = _parse_position_angle(block, context),
    )
    if elements.a <= 0.0:
      raise ValueError(f"{context}.a must be positive, got {elements.a}")
    if math.hypot(elements.ex, elements.ey) >= 1.0:
      raise ValueError(f"{context} eccentricity vector norm must be < 1")
    return elements

  if key == 'circular':
    elements = CircularOrbitConfiguration(
      a              = _get_required_float(block, 'a', context),
      ex             = _get_float(block, 'ex',     context),
      ey             = _get_float(block, 'ey',     context),
      i              = _get_float(block, 'i',      context),
      raan           = _get_float(block, 'raan',   context),
      alpha_v        = _get_float(block, 'alphaV', context),
      position_angle = _parse_position_angle(block, context),
    )
    if elements.a <= 0.0:
      raise ValueError(f"{context}.a must be positive, got {elements.a}")
    if math.hypot(elements.ex, elements.ey) >= 1.0:
      raise ValueError(f"{context} eccentricity vector norm must be < 1")
    if not 0.0 <= elements.i <= 180.0:
      raise ValueError(f"{context}.i must be in [0, 180] deg, got {elements.i}")
    return elements

  if key == 'tle':
    line_1 = block.get('line1')
    line_2 = block.get('line2')
    validate_tle_lines(line_1, line_2)
    epoch, tle_satellite = get_tle_satellite_and_tle_epoch(line_1, line_2)
    check_tle_satellite(tle_satellite)
    return TleConfiguration(
      line_1 = line_1,
      line_2 = line_2,
      epoch  = epoch,
    )

  return CartesianOrbitConfiguration(
    x  = _get_float(block, 'x',  context),
    y  = _get_float(block, 'y',  context),
    z  = _get_float(block, 'z',  context),
    vx = _get_float(block, 'vx', context),
    vy = _get_float(block, 'vy', context),
    vz = _get_float(block, 'vz', context),
  )


def parse_orbit(
  raw_orbit : Optional[dict],
) -> Optional[OrbitConfiguration]:
  """
  Parse the `orbit` block. A missing block is returned as None.
  """
  if raw_orbit is None:
    return None

  raw_orbit_type = _get_block(raw_orbit, 'orbitType', 'orbit')
  if raw_orbit_type is None:
    raise ValueError("orbit.orbitType must be defined")

  elements = parse_orbit_elements(raw_orbit_type)

  # The TLE carries its own epoch
  raw_date = raw_orbit.get('date')
  if isinstance(elements, TleConfiguration):
    date = None
  elif raw_date is None:
    raise ValueError("orbit.date must be defined")
  else:
    date = parse_time(raw_date)

  return OrbitConfiguration(
    elements   = elements,
    date       = date,
    frame_name = raw_orbit.get('frameName') or DEFAULTS.ORBIT_FRAME_NAME,
    type_name  = raw_orbit_type.get('name'),
  )


def parse_integrator(
  raw_integrator : Optional[dict],
  context        : str,
) -> Optional[IntegratorSettings]:
  """
  Parse an integrator block into its tagged settings.

  A non-zero `fixedStep` selects a fixed-step integrator; otherwise the block
  describes an adaptive integrator. A missing block is returned as None.
  """
  if raw_integrator is None:
    return None

  fixed_step = _get_float(raw_integrator, 'fixedStep', context)
  if fixed_step < 0.0:
    raise ValueError(f"{context}.fixedStep must be positive, got {fixed_step}")
  if fixed_step != DEFAULTS.NULL_DOUBLE:
    return FixedStepIntegratorSettings(step=fixed_step)

  min_step       = _get_float(raw_integrator, 'minStep',       context)
  max_step       = _get_float(raw_integrator, 'maxStep',       context)
  position_error = _get_float(raw_integrator, 'positionError', context)
  if min_step <= 0.0 or max_step <= 0.0:
    raise ValueError(f"{context}.minStep and {context}.maxStep must be positive when fixedStep is not set")
  if min_step > max_step:
    raise ValueError(f"{context}.minStep ({min_step}) must not exceed {context}.maxStep ({max_step})")
  if position_error <= 0.0:
    raise ValueError(f"{context}.positionError must be positive, got {position_error}")

  return AdaptiveStepIntegratorSettings(
    min_step       = min_step,
    max_step       = max_step,
    position_error = position_error,
  )


def parse_force_models(
  raw_force_models : Optional[dict],
) -> ForceModelConfiguration:
  """
  Parse the `forceModels` block. A null third-body list becomes an empty tuple.
  """
  if raw_force_models is None:
    return ForceModelConfiguration()

  # Gravity
  raw_gravity = _get_block(raw_force_models, 'gravity', 'forceModels') or {}
  gravity = GravityConfiguration(
    degree = _get_int(raw_gravity, 'degree', 'forceModels.gravity'),
    order  = _get_int(raw_gravity, 'order',  'forceModels.gravity'),
  )
  if gravity.degree < 0 or gravity.order < 0:
    raise ValueError("forceModels.gravity degree and order must not be negative")

  # Third bodies
  raw_third_bodies = raw_force_models.get('thirdBody') or []
  if not isinstance(raw_third_bodies, list):
    raise ValueError("forceModels.thirdBody must be a list")
  third_bodies = []
  for index, raw_third_body in enumerate(raw_third_bodies):
    if not isinstance(raw_third_body, dict) or not raw_third_body.get('name'):
      raise ValueError(f"forceModels.thirdBody[{index}].name must be defined")
    third_bodies.append(ThirdBodyConfiguration(
      name             = str(raw_third_body['name']),
      with_solid_tides = _get_bool(raw_third_body, 'withSolidTides', f'forceModels.thirdBody[{index}]'),
    ))

  # Drag
  drag     = None
  raw_drag = _get_block(raw_force_models, 'drag', 'forceModels')
  if raw_drag is not None:
    drag = DragConfiguration(
      area = _get_float(raw_drag, 'area', 'forceModels.drag'),
      cd   = _get_float(raw_drag, 'cd',   'forceModels.drag'),
    )

  # Solar radiation pressure
  srp     = None
  raw_srp = _get_block(raw_force_models, 'solarRadiationPressure', 'forceModels')
  if raw_srp is not None:
    srp = SolarRadiationPressureConfiguration(
      area = _get_float(raw_srp, 'area', 'forceModels.solarRadiationPressure'),
      cr   = _get_float(raw_srp, 'cr',   'forceModels.solarRadiationPressure'),
    )

  # Relativity
  raw_relativity = _get_block(raw_force_models, 'relativity', 'forceModels') or {}
  relativity     = RelativityConfiguration(is_used=_get_bool(raw_relativity, 'isUsed', 'forceModels.relativity'))

  return ForceModelConfiguration(
    gravity                  = gravity,
    third_bodies             = tuple(third_bodies),
    drag                     = drag,
    solar_radiation_pressure = srp,
    relativity               = relativity,
  )


def build_config(
  raw_inputs : dict,
) -> ComparatorInputs:
  """
  Parse and validate the raw YAML mapping of a comparison run.

  Input:
  ------
    raw_inputs : dict
      Mapping loaded from the YAML input file.

  Output:
  -------
    config : ComparatorInputs
      Frozen configuration of the run.

  Raises:
  -------
    ValueError
      If a value is missing, of the wrong type, or out of range.
  """
  if not isinstance(raw_inputs, dict):
    raise ValueError("Input file must contain a YAML mapping")

  # Propagation duration
  if raw_inputs.get('propagationDuration') is None:
    raise ValueError("propagationDuration must be defined")
  propagation_duration = _get_float(raw_inputs, 'propagationDuration', 'inputs')
  if propagation_duration < 0.0:
    raise ValueError(f"propagationDuration must not be negative, got {propagation_duration}")

  # DSST interpolation grid
  raw_dsst_integrator = _get_block(raw_inputs, 'dsstIntegrator', 'inputs')
  max_time_gap        = DEFAULTS.DSST_INTERPOLATION_MAX_TIME_GAP
  if raw_dsst_integrator is not None:
    max_time_gap = _get_float(
      raw_dsst_integrator,
      'interpolationMaxTimeGap',
      'dsstIntegrator',
      default = DEFAULTS.DSST_INTERPOLATION_MAX_TIME_GAP,
    )
    if max_time_gap <= 0.0:
      raise ValueError(f"dsstIntegrator.interpolationMaxTimeGap must be positive, got {max_time_gap}")

  return ComparatorInputs(
    propagation_duration            = propagation_duration,
    body                            = parse_central_body(_get_block(raw_inputs, 'body', 'inputs')),
    orbit                           = parse_orbit(_get_block(raw_inputs, 'orbit', 'inputs')),
    numerical_integrator            = parse_integrator(_get_block(raw_inputs, 'numericalIntegrator', 'inputs'), 'numericalIntegrator'),
    dsst_integrator                 = parse_integrator(raw_dsst_integrator, 'dsstIntegrator'),
    force_models                    = parse_force_models(_get_block(raw_inputs, 'forceModels', 'inputs')),
    dsst_interpolation_max_time_gap = max_time_gap,
  )


def _format_integrator(
  settings : Optional[IntegratorSettings],
) -> str:
  if settings is None:
    return "None"
  if isinstance(settings, FixedStepIntegratorSettings):
    return f"RK4, step {settings.step} s"
  return f"DP853, step [{settings.min_step}, {settings.max_step}] s, position error {settings.position_error} m"


def print_configuration(
  config         : ComparatorInputs,
  input_filepath : Optional[object] = None,
) -> None:
  """
  Print the input configuration in a formatted table.

  Input:
  ------
    config : ComparatorInputs
      Parsed configuration.
    input_filepath : Path | None
      File the configuration was read from.

  Output:
  -------
    None
  """
  force_models = config.force_models

  print("\nInput Configuration")
  if input_filepath is not None:
    print(f"  Input Filepath           : {input_filepath}")
  print(f"  Propagation Duration     : {config.propagation_duration} day ({config.propagation_duration_s} s)")

  # Central body
  print(f"  Central Body")
  print(f"    IERS Conventions       : {config.body.iers_convention_year}")
  print(f"    Frame                  : {config.body.frame_name or 'ITRF (default)'}")
  print(f"    Equatorial Radius      : {config.body.equatorial_radius or 'WGS84 (default)'}")
  print(f"    Inverse Flattening     : {config.body.inverse_flattening or 'WGS84 (default)'}")

  # Orbit
  print(f"  Initial Orbit")
  if config.orbit is None:
    print(f"    None")
  else:
    elements = config.orbit.elements
    print(f"    Type                   : {type(elements).__name__.replace('OrbitConfiguration', '').replace('Configuration', '')}")
    print(f"    Frame                  : {config.orbit.frame_name}")
    if isinstance(elements, TleConfiguration):
      print(f"    Epoch                  : {elements.epoch.isoformat()} UTC (TLE)")
      print(f"    Line 1                 : {elements.line_1}")
      print(f"    Line 2                 : {elements.line_2}")
    else:
      print(f"    Epoch                  : {config.orbit.date.isoformat()} UTC")

  # Integrators
  print(f"  Integrators")
  print(f"    Numerical              : {_format_integrator(config.numerical_integrator)}")
  print(f"    DSST                   : {_format_integrator(config.dsst_integrator)}")
  print(f"    DSST Max Time Gap      : {config.dsst_interpolation_max_time_gap} s")

  # Force models
  third_bodies_str = ', '.join(
    f"{third_body.name}{' (tides)' if third_body.with_solid_tides else ''}" for third_body in force_models.third_bodies
  ) or 'None'
  print(f"  Force Models")
  print(f"    Gravity                : degree {force_models.gravity.degree}, order {force_models.gravity.clamped_order}")
  print(f"    Third Bodies           : {third_bodies_str}")
  if force_models.drag is not None:
    print(f"    Drag                   : area {force_models.drag.area} m², cd {force_models.drag.cd}")
  else:
    print(f"    Drag                   : None")
  if force_models.solar_radiation_pressure is not None:
    srp = force_models.solar_radiation_pressure
    print(f"    SRP                    : area {srp.area} m², cr {srp.cr}")
  else:
    print(f"    SRP                    : None")
  print(f"    Relativity             : {force_models.relativity.is_used}")
