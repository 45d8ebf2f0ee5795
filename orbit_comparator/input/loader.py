import os
import yaml

from datetime import datetime
from pathlib  import Path
from typing   import Optional, Union

OREKIT_DATA_ENVIRONMENT_VARIABLE = 'OREKIT_DATA_PATH'


def get_project_root() -> Path:
  """
  Return the project root (the folder holding `data/` and `output/`).
  """
  return Path(__file__).parent.parent.parent


def resolve_input_filepath(
  input_filename : Union[str, Path],
) -> Path:
  """
  Resolve the YAML input file.

  Input:
  ------
    input_filename : str | Path
      Path as given on the command line. If it does not exist as given, it is
      looked up in the project's `data/inputs` resources folder.

  Output:
  -------
    input_filepath : Path
      Absolute path of the input file.

  Raises:
  -------
    FileNotFoundError
      If the file exists in neither location.
  """
  input_filepath = Path(input_filename)
  if input_filepath.is_file():
    return input_filepath.resolve()

  resources_filepath = get_project_root() / 'data' / 'inputs' / input_filepath
  if resources_filepath.is_file():
    return resources_filepath.resolve()

  raise FileNotFoundError(f"Input file not found: {input_filename} (also looked in {resources_filepath.parent})")


def load_yaml_inputs(
  input_filepath : Path,
) -> dict:
  """
  Load the raw mapping of a YAML input file.

  Input:
  ------
    input_filepath : Path
      Path to the YAML input file.

  Output:
  -------
    raw_inputs : dict
      Raw mapping (camelCase keys as written in the file).
  """
  print("\nRead Inputs")
  print(f"  Input Filepath : {input_filepath}")

  with open(input_filepath, 'r') as f:
    raw_inputs = yaml.safe_load(f)

  if raw_inputs is None:
    raw_inputs = {}

  print(f"  Status         : done")
  return raw_inputs


def resolve_orekit_data_folderpath(
  data_folderpath : Optional[Union[str, Path]] = None,
) -> Path:
  """
  Resolve the folder crawled for Orekit data (EOP, UTC-TAI, ephemerides,
  gravity fields, space weather).

  Input:
  ------
    data_folderpath : str | Path | None
      Explicit folder. If None, the OREKIT_DATA_PATH environment variable is
      used, then $HOME/orekit-data.

  Output:
  -------
    data_folderpath : Path
      Folder to crawl.
  """
  if data_folderpath is not None:
    return Path(data_folderpath)

  environment_data_path = os.environ.get(OREKIT_DATA_ENVIRONMENT_VARIABLE)
  if environment_data_path:
    return Path(environment_data_path)

  return Path.home() / 'orekit-data'


def setup_paths(
  output_folderpath : Optional[Path] = None,
) -> dict:
  """
  Set up the output folder of a run.

  Input:
  ------
    output_folderpath : Path | None
      Root output folder. Defaults to <project_root>/output.

  Output:
  -------
    paths : dict
      A dictionary containing the output, timestamp and log file paths.
  """
  if output_folderpath is None:
    output_folderpath = get_project_root() / 'output'

  timestamp_str        = datetime.now().strftime("%Y%m%d_%H%M%S")
  timestamp_folderpath = output_folderpath / timestamp_str
  log_filepath         = timestamp_folderpath / 'output.log'

  # Ensure output directory exists
  timestamp_folderpath.mkdir(parents=True, exist_ok=True)

  return {
    'output_folderpath'    : output_folderpath,
    'timestamp_folderpath' : timestamp_folderpath,
    'log_filepath'         : log_filepath,
  }
