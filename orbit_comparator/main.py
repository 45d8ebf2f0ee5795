"""
Orbit Comparator

Description:
  Propagates the same initial orbit with two propagators over the same
  duration and prints their final states and wall-clock run times:
  - a numerical (Cowell) propagator integrating equinoctial elements
  - a DSST semi-analytical propagator integrating mean elements and
    exporting osculating states

  Both propagators share the central body, the gravity field (normalized
  provider for the numerical side, unnormalized for DSST), the celestial bodies
  and the spacecraft models. Available force models:
  - Earth non-spherical gravity (Holmes-Featherstone / DSST zonal + tesseral)
  - Atmospheric drag (NRLMSISE-00 with CSSI space weather)
  - Solar Radiation Pressure (SRP)
  - Third-body gravity, with optional solid tides
  - Relativity (numerical propagator only)

  The script performs the following steps:
  1. Reads and validates the YAML input file.
  2. Loads the Orekit data folder (OREKIT_DATA_PATH or $HOME/orekit-data).
  3. Builds the central body, gravity fields and initial orbit.
  4. Builds both integrators and propagators.
  5. Runs the numerical then the DSST propagation, timing each.
  6. Prints the comparison of both final states.

Usage:

  Argument                     Required   Description
  ---------------------------  --------   --------------------------------------------------
  input_filename               Yes        YAML input file (path, or name under data/inputs)

  Example Commands:
    python -m orbit_comparator.main s1_two_body_keplerian.yaml

    OREKIT_DATA_PATH=/path/to/orekit-data \
      orbit-comparator data/inputs/s3_leo_full_forces.yaml
"""
import sys

from pathlib import Path
from typing  import Optional, Union

from orbit_comparator.input.cli              import parse_command_line_arguments
from orbit_comparator.input.configuration    import build_config, print_configuration
from orbit_comparator.input.loader           import load_yaml_inputs, resolve_input_filepath, resolve_orekit_data_folderpath, setup_paths
from orbit_comparator.model.orekit_context   import load_data_context, get_loaded_data_names
from orbit_comparator.model.environment      import build_environment
from orbit_comparator.propagation.propagator import run_propagations
from orbit_comparator.utility.printer        import print_comparison, print_loaded_data_names
from orbit_comparator.utility.logger         import start_logging, stop_logging


def report_error(
  exc : Exception,
) -> None:
  print(f"[ERROR] {exc}", file=sys.stderr)


def main(
  input_filename    : Union[str, Path],
  output_folderpath : Optional[Path] = None,
  data_folderpath   : Optional[Path] = None,
) -> dict:
  """
  Run the numerical versus DSST comparison described by an input file.

  Input:
  ------
    input_filename : str | Path
      YAML input file, as a path or relative to data/inputs.
    output_folderpath : Path | None
      Root folder of the run logs. Defaults to <project_root>/output.
    data_folderpath : Path | None
      Orekit data folder. Defaults to OREKIT_DATA_PATH, then $HOME/orekit-data.

  Output:
  -------
    results : dict
      'numerical' and 'dsst' propagation results.

  Raises:
  -------
    ValueError
      If the configuration is invalid.
    FileNotFoundError
      If the input file or the data folder is missing.
  """
  # Output paths and logging to file
  try:
    paths  = setup_paths(output_folderpath)
    logger = start_logging(
      paths['log_filepath'],
    )
  except OSError as exc:
    report_error(exc)
    raise

  try:
    # Read and print the input configuration
    input_filepath = resolve_input_filepath(input_filename)
    raw_inputs     = load_yaml_inputs(input_filepath)
    config         = build_config(raw_inputs)
    print_configuration(config, input_filepath)

    # Data providers catalog
    data_context = load_data_context(
      resolve_orekit_data_folderpath(data_folderpath).resolve(),
    )

    # Shared environment: central body, gravity fields, initial orbit
    environment = build_environment(config, data_context)

    # Run propagations: numerical and DSST
    result_numerical, result_dsst = run_propagations(config, environment)

    # Display comparison
    print_comparison(
      result_numerical,
      result_dsst,
    )
    print_loaded_data_names(get_loaded_data_names(data_context))

  except Exception as exc:
    # Reported while stderr is still mirrored into the log
    report_error(exc)
    raise

  finally:
    # Stop logging
    stop_logging(logger)

  return {
    'numerical' : result_numerical,
    'dsst'      : result_dsst,
  }


def run_cli(
  argv : Optional[list[str]] = None,
) -> int:
  """
  Command-line entry point. Returns the process exit code. Errors are
  reported on stderr by main(), so only the exit code is set here.
  """
  args = parse_command_line_arguments(argv)

  try:
    main(args.input_filename)
  except Exception:
    return 1

  return 0


if __name__ == "__main__":
  sys.exit(run_cli())
