"""
Global settings that control the overall behavior of blindseg.

Currently, settings control the following:

* ``OVERWRITE_LOG``: whether logs should be overwritten (not overwriting helps when copy-pasting run files and forgetting to change the output location)
* ``LOG_LEVEL_CONSOLE``: verbosity of console output (``DEBUG`` | ``INFO`` | ``WARNING`` | ``ERROR`` | ``CRITICAL``)
* ``LOG_LEVEL_FILE``: verbosity of file output (``DEBUG`` | ``INFO`` | ``WARNING`` | ``ERROR`` | ``CRITICAL``)
* ``NUM_WORKERS``: number of worker threads used by the counting passes
* ``NUM_SHARDS``: number of independently locked shards of a frequency table
* ``LINES_PER_CHUNK``: number of corpus lines handed to a worker at once
* ``DEFAULT_N``: default group width
* ``DEFAULT_THRESHOLD``: default filter threshold
* ``DEFAULT_LOG_PATH``: default location to write out logs

There are several predefined configurations (``Standard``, ``Debug``, ``Unittest``), with ``Standard`` being used by
default. Settings are specified from the command line using ``--settings={standard|debug|unittest}`` and should not be
changed during execution.

It is possible to control individual settings by setting an environment variable of the same name, e.g. like this:
``NUM_WORKERS=4 blindseg my_runs.yaml``

To specify a custom configuration, subclass ``settings.Standard`` accordingly and add an alias to ``settings._aliases``.
"""

import sys
import os

class Standard(object):
  """
  Standard configuration, used by default.
  """
  OVERWRITE_LOG = False
  LOG_LEVEL_CONSOLE = "INFO"
  LOG_LEVEL_FILE = "DEBUG"
  NUM_WORKERS = os.cpu_count() or 1
  NUM_SHARDS = 64
  LINES_PER_CHUNK = 256
  DEFAULT_N = 2
  DEFAULT_THRESHOLD = 1
  DEFAULT_LOG_PATH = "{RUN_DIR}/logs/{RUN}.log"

class Debug(Standard):
  """
  Adds verbosity and runs the passes on few workers to help debugging code or run files.
  """
  OVERWRITE_LOG = True
  LOG_LEVEL_CONSOLE = "DEBUG"
  LOG_LEVEL_FILE = "DEBUG"
  NUM_WORKERS = 2

class Unittest(Standard):
  """
  Less verbosity and small chunks, activated automatically when running the unit tests from the "test" package.
  """
  OVERWRITE_LOG = True
  LOG_LEVEL_CONSOLE = "WARNING"
  NUM_WORKERS = 4
  NUM_SHARDS = 8
  LINES_PER_CHUNK = 2
  DEFAULT_LOG_PATH = "test/tmp/{RUN}.log"

_int_settings = {"NUM_WORKERS", "NUM_SHARDS", "LINES_PER_CHUNK", "DEFAULT_N", "DEFAULT_THRESHOLD"}
_bool_settings = {"OVERWRITE_LOG"}

class SettingsAccessor(object):
  def __getattr__(self, item):
    if _active is None:
      _resolve_active_settings()
    return getattr(_active, item)

settings = SettingsAccessor()

def _convert(key: str, val: str):
  if key in _int_settings:
    return int(val)
  if key in _bool_settings:
    return val.lower() not in ("0", "false", "no", "")
  return val

def _resolve_active_settings() -> None:
  # use command line argument, if not given use environment var, if not given use 'standard'
  # overwrite with environment variables if present.
  global _active
  settings_alias = "standard"
  settings_alias = os.environ.get("BLINDSEG_SETTINGS", default=settings_alias)
  for arg in sys.argv:
    if arg.startswith("--settings"):
      settings_alias = arg.split("=")[1]
  _active = _aliases[settings_alias]
  for key, val in os.environ.items():
    if hasattr(_active, key):
      setattr(_active, key, _convert(key, val))

_active = None

_aliases = {
  "settings.standard" : Standard,
  "standard": Standard,
  "settings.debug" : Debug,
  "debug": Debug,
  "settings.unittest" : Unittest,
  "unittest": Unittest,
}
