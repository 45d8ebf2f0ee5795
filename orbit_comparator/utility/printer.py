import numpy as np

from orbit_comparator.model.constants import CONVERTER


def print_propagation_result(
  label        : str,
  wall_clock_s : float,
  state        : object,
) -> None:
  """
  Print the elapsed wall-clock time of a propagation, then its final state.

  Input:
  ------
    label : str
      Propagator label (e.g. "Numerical", "DSST").
    wall_clock_s : float
      Elapsed wall-clock time [s].
    state : SpacecraftState
      Final state, printed with its canonical string rendering.
  """
  print(f"\n{label} wall clock run time (s): {wall_clock_s}")
  print(f"{state}")


def print_loaded_data_names(
  data_names : list[str],
) -> None:
  print("\nLoaded Data")
  if not data_names:
    print("  None")
  for data_name in data_names:
    print(f"  {data_name}")


def compute_comparison(
  result_numerical : dict,
  result_dsst      : dict,
) -> dict:
  """
  Compare the final states of both propagations.

  Input:
  ------
    result_numerical : dict
      Numerical propagation result.
    result_dsst : dict
      DSST propagation result.

  Output:
  -------
    comparison : dict
      pos_diff_mag [m], vel_diff_mag [m/s], sma_diff [m], ecc_diff [-] and
      wall_clock_ratio (DSST over numerical, inf if the numerical run took no
      measurable time).
  """
  pos_diff_vec = np.asarray(result_dsst['pos_vec']) - np.asarray(result_numerical['pos_vec'])
  vel_diff_vec = np.asarray(result_dsst['vel_vec']) - np.asarray(result_numerical['vel_vec'])

  if result_numerical['wall_clock_s'] > 0.0:
    wall_clock_ratio = result_dsst['wall_clock_s'] / result_numerical['wall_clock_s']
  else:
    wall_clock_ratio = np.inf

  return {
    'pos_diff_mag'     : float(np.linalg.norm(pos_diff_vec)),
    'vel_diff_mag'     : float(np.linalg.norm(vel_diff_vec)),
    'sma_diff'         : result_dsst['coe']['sma'] - result_numerical['coe']['sma'],
    'ecc_diff'         : result_dsst['coe']['ecc'] - result_numerical['coe']['ecc'],
    'wall_clock_ratio' : float(wall_clock_ratio),
  }


def print_comparison(
  result_numerical : dict,
  result_dsst      : dict,
) -> None:
  """
  Print the comparison block of both final states.
  """
  comparison = compute_comparison(result_numerical, result_dsst)

  print("\nComparison (DSST - Numerical)")
  print(f"  Position Difference : {comparison['pos_diff_mag']:>19.12e} m")
  print(f"  Velocity Difference : {comparison['vel_diff_mag']:>19.12e} m/s")
  print(f"  Wall Clock Ratio    : {comparison['wall_clock_ratio']:>19.12e}")
  print(f"  Final Elements")
  print(f"                  {'Numerical':>19s}  {'DSST':>19s}")
  for result_key, label, unit, scale in (
    ('sma',  'SMA ', 'm',   1.0),
    ('ecc',  'ECC ', '',    1.0),
    ('inc',  'INC ', 'deg', CONVERTER.DEG_PER_RAD),
    ('raan', 'RAAN', 'deg', CONVERTER.DEG_PER_RAD),
  ):
    value_numerical = result_numerical['coe'][result_key] * scale
    value_dsst      = result_dsst['coe'][result_key] * scale
    print(f"    {label} : {value_numerical:>19.12e}  {value_dsst:>19.12e} {unit}")
