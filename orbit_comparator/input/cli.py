import sys
import argparse

from typing import Optional


def parse_command_line_arguments(
  argv : Optional[list[str]] = None,
) -> argparse.Namespace:
  """
  Parse command-line arguments of the orbit comparator.

  Input:
  ------
    argv : list[str] | None
      Arguments to parse. Defaults to sys.argv[1:].

  Output:
  -------
    args : argparse.Namespace
      Parsed command-line arguments (input_filename).
  """
  parser = argparse.ArgumentParser(
    description     = 'Compare a numerical (Cowell) propagator with a DSST propagator',
    formatter_class = argparse.RawDescriptionHelpFormatter,
  )

  # If no arguments provided, print help and exit
  if argv is None and len(sys.argv) == 1:
    parser.print_help(sys.stderr)
    sys.exit(1)

  parser.add_argument(
    'input_filename',
    type = str,
    help = "YAML input file, as a path or relative to data/inputs (e.g. 's1_two_body_keplerian.yaml').",
  )

  args = parser.parse_args(argv)

  return args
