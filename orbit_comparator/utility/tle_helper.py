from datetime import datetime, timedelta
from sgp4.api import SGP4_ERRORS, Satrec

TLE_LINE_LENGTH = 69


def compute_tle_checksum(
  tle_line : str,
) -> int:
  """
  Compute the modulo-10 checksum of a TLE line.

  Input:
  ------
    tle_line : str
      TLE line (the last character, the checksum itself, is ignored).

  Output:
  -------
    checksum : int
      Sum of all digits plus one per minus sign, modulo 10.
  """
  checksum = 0
  for char in tle_line[:TLE_LINE_LENGTH - 1]:
    if char.isdigit():
      checksum += int(char)
    elif char == '-':
      checksum += 1
  return checksum % 10


def validate_tle_lines(
  tle_line1 : str,
  tle_line2 : str,
) -> None:
  """
  Check the NORAD two-line format of a TLE.

  Input:
  ------
    tle_line1 : str
      First line of TLE.
    tle_line2 : str
      Second line of TLE.

  Raises:
  -------
    ValueError
      If a line has the wrong length, line number or checksum, or if the
      satellite numbers of both lines differ.
  """
  for line_number, tle_line in ((1, tle_line1), (2, tle_line2)):
    if tle_line is None:
      raise ValueError(f"TLE line {line_number} must be defined")
    if len(tle_line) != TLE_LINE_LENGTH:
      raise ValueError(f"TLE line {line_number} must be {TLE_LINE_LENGTH} characters long, got {len(tle_line)}")
    if tle_line[0] != str(line_number):
      raise ValueError(f"TLE line {line_number} must start with '{line_number}'")
    if not tle_line[-1].isdigit() or int(tle_line[-1]) != compute_tle_checksum(tle_line):
      raise ValueError(f"TLE line {line_number} has an invalid checksum")

  if tle_line1[2:7] != tle_line2[2:7]:
    raise ValueError(f"TLE satellite numbers differ: {tle_line1[2:7]} vs {tle_line2[2:7]}")


def get_tle_satellite_and_tle_epoch(
  tle_line1 : str,
  tle_line2 : str,
) -> tuple[datetime, Satrec]:
  """
  Create Satrec object and extract epoch from TLE. Deconstruct datetime from year
  and fractional days to make it precise.

  Input:
  ------
    tle_line1 : str
      First line of TLE.
    tle_line2 : str
      Second line of TLE.

  Output:
  -------
    tuple[datetime, Satrec]
      Epoch datetime (UTC) and Satellite object.

  Notes:
  ------
    The fractional day is used directly rather than the Julian date, which
    keeps microsecond precision within a 64-bit float.
  """
  # Satellite object of TLE
  tle_satellite = Satrec.twoline2rv(
    tle_line1,
    tle_line2,
  )

  # Extract year
  tle_year = tle_satellite.epochyr
  if tle_year < 57:
    tle_year += 2000
  else:
    tle_year += 1900

  # Extract days of year
  tle_days = tle_satellite.epochdays

  # Convert to datetime object
  tle_time_datetime = datetime(tle_year, 1, 1) + timedelta(days=tle_days - 1)

  # Return epoch datetime and satellite object
  return tle_time_datetime, tle_satellite


def check_tle_satellite(
  tle_satellite : Satrec,
) -> None:
  """
  Evaluate SGP4 at the TLE epoch and reject element sets it cannot propagate.

  Input:
  ------
    tle_satellite : Satrec
      Satellite object of the TLE.

  Raises:
  -------
    ValueError
      If SGP4 reports an error at the TLE epoch.
  """
  error_code, _, _ = tle_satellite.sgp4(tle_satellite.jdsatepoch, tle_satellite.jdsatepochF)
  if error_code != 0:
    raise ValueError(f"TLE rejected by SGP4 at its epoch: {SGP4_ERRORS.get(error_code, error_code)}")
