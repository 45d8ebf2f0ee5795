class CONVERTER:
  # Angle Conversions
  RAD_PER_DEG = 3.141592653589793 / 180.0  # [radian] per [degree]
  DEG_PER_RAD = 180.0 / 3.141592653589793  # [degree] per [radian]

  # Time Conversions
  SEC_PER_DAY  = 86400.0                   # [seconds] per [day]


class DEFAULTS:
  """
  Defaults applied when the input file leaves a value unset.
  """
  # YAML null and a missing numeric key both map to this sentinel
  NULL_DOUBLE = 0.0

  # Central body
  IERS_CONVENTION_YEAR = 2010
  ORBIT_FRAME_NAME     = 'EME2000'

  # Initial orbit
  POSITION_ANGLE = 'TRUE'

  # DSST short-period resampling grid
  DSST_INTERPOLATION_MAX_TIME_GAP = 86400.0  # [s]


class SOLARSYSTEMCONSTANTS:
  """
  Class to hold physical constants used by the analytical reference code.
  """

  class EARTH:
    GP = 3.986004415e14  # Earth's gravitational parameter (EIGEN-5C) [m³/s²]


class POSITIONANGLES:
  """
  Names accepted for the position angle convention of an element set.
  """
  TRUE      = 'TRUE'
  ECCENTRIC = 'ECCENTRIC'
  MEAN      = 'MEAN'

  ALL = (TRUE, ECCENTRIC, MEAN)
