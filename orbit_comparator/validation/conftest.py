"""
Pytest Configuration and Fixtures
=================================

Shared fixtures for all validation tests.
"""
import os
import pytest

from pathlib import Path
from typing  import Optional

from orbit_comparator.input.loader import OREKIT_DATA_ENVIRONMENT_VARIABLE


def find_orekit_data_folderpath() -> Optional[Path]:
  """
  Locate an Orekit data folder: OREKIT_DATA_PATH, $HOME/orekit-data, then the
  orekitdata package. Returns None if none is found.
  """
  environment_data_path = os.environ.get(OREKIT_DATA_ENVIRONMENT_VARIABLE)
  if environment_data_path and Path(environment_data_path).is_dir():
    return Path(environment_data_path).resolve()

  home_data_folderpath = Path.home() / 'orekit-data'
  if home_data_folderpath.is_dir():
    return home_data_folderpath.resolve()

  try:
    import orekitdata
  except ImportError:
    return None
  package_data_folderpath = Path(orekitdata.__file__).parent
  if package_data_folderpath.is_dir():
    return package_data_folderpath.resolve()
  return None


@pytest.fixture(scope="session")
def project_root():
  """Return the project root directory."""
  return Path(__file__).parent.parent.parent


@pytest.fixture(scope="session")
def inputs_folderpath(project_root):
  """Return the folder of the example input files."""
  return project_root / "data" / "inputs"


@pytest.fixture(scope="session")
def orekit_data_folderpath():
  """Return the Orekit data folder, skipping if Orekit or its data is missing."""
  pytest.importorskip("orekit_jpype")
  data_folderpath = find_orekit_data_folderpath()
  if data_folderpath is None:
    pytest.skip("Orekit data folder not found (set OREKIT_DATA_PATH or install orekitdata)")
  return data_folderpath


@pytest.fixture(scope="session")
def data_context(orekit_data_folderpath):
  """Data context loaded once for the whole session."""
  from orbit_comparator.model.orekit_context import load_data_context
  return load_data_context(orekit_data_folderpath)


@pytest.fixture
def two_body_raw_inputs():
  """Raw inputs of a two-body run on a 7000 km near-circular orbit."""
  return {
    'propagationDuration' : 1.0,
    'orbit' : {
      'date'      : '2023-01-01T00:00:00',
      'frameName' : 'EME2000',
      'orbitType' : {
        'name'      : 'keplerian',
        'keplerian' : {
          'a'             : 7000000.0,
          'e'             : 1.0e-3,
          'i'             : 51.6,
          'pa'            : 0.0,
          'raan'          : 0.0,
          'v'             : 0.0,
          'positionAngle' : 'MEAN',
        },
      },
    },
    'numericalIntegrator' : {'minStep': 0.001, 'maxStep': 300.0, 'positionError': 1.0e-3},
    'dsstIntegrator'      : {'minStep': 0.001, 'maxStep': 300.0, 'positionError': 1.0e-3},
    'forceModels'         : {'gravity': {'degree': 0, 'order': 0}},
  }


@pytest.fixture
def iss_tle_lines():
  """ISS TLE (2008-09-20)."""
  return (
    "1 25544U 98067A   08264.51782528 -.00002182  00000-0 -11606-4 0  2927",
    "2 25544  51.6416 247.4627 0006703 130.5360 325.0288 15.72125391563537",
  )
