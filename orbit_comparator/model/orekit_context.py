"""
Orekit Context
==============

Starts the Java virtual machine hosting Orekit and builds the data context
(time scales, frames, celestial bodies, gravity fields, space weather) that
every builder reads from.

Every module importing Orekit or Hipparchus classes imports this module first,
so the JVM is running before any `from org.orekit...` statement executes.
"""
import jpype
import orekit_jpype

from functools import lru_cache
from pathlib   import Path


def start_orekit_vm() -> None:
  """
  Start the JVM hosting Orekit. Does nothing if it is already running.
  """
  if not jpype.isJVMStarted():
    orekit_jpype.initVM()


start_orekit_vm()

from java.io         import File
from org.orekit.data import DataContext, DirectoryCrawler


@lru_cache(maxsize=None)
def load_data_context(
  data_folderpath : Path,
) -> DataContext:
  """
  Register the data folder with the process-wide data providers manager.

  The folder is crawled recursively and its files are loaded lazily, on first
  use, then cached for the lifetime of the process. Repeated calls with the
  same folder return the same context without registering it twice.

  Input:
  ------
    data_folderpath : Path
      Folder holding UTC-TAI history, EOP, ephemerides, gravity fields and
      CSSI space weather files.

  Output:
  -------
    data_context : DataContext
      Data context to pass to the builders.

  Raises:
  -------
    FileNotFoundError
      If the folder does not exist.
  """
  data_folderpath = Path(data_folderpath)
  if not data_folderpath.is_dir():
    raise FileNotFoundError(f"Orekit data folder not found: {data_folderpath}")

  print("\nLoad Data")
  print(f"  Orekit Data Folderpath : {data_folderpath}")

  data_context = DataContext.getDefault()
  data_context.getDataProvidersManager().addProvider(DirectoryCrawler(File(str(data_folderpath))))
  return data_context


def get_loaded_data_names(
  data_context : DataContext,
) -> list[str]:
  """
  Return the names of the data files loaded so far, sorted.
  """
  return sorted(str(name) for name in data_context.getDataProvidersManager().getLoadedDataNames())
