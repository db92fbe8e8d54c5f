import sys
import logging
import numbers

import yaml

from blindseg.settings import settings
from blindseg import utils

STD_OUTPUT_LEVELNO = 35

class NoErrorFilter(logging.Filter):
  def filter(self, record: logging.LogRecord) -> bool:
    return not record.levelno in [logging.WARNING, logging.ERROR, logging.CRITICAL]

class ErrorOnlyFilter(logging.Filter):
  def filter(self, record: logging.LogRecord) -> bool:
    return record.levelno in [logging.WARNING, logging.ERROR, logging.CRITICAL]

class MainFormatter(logging.Formatter):
  def format(self, record: logging.LogRecord) -> str:
    # several handlers format the same record
    record = logging.makeLogRecord(record.__dict__)
    msg = str(record.msg)
    if record.levelno in [logging.WARNING, logging.ERROR, logging.CRITICAL]:
      msg = "\n".join([f"{record.levelname}: {line}" for line in msg.split("\n")])
    record.msg = msg
    return super().format(record)

class YamlFormatter(logging.Formatter):
  def format(self, record: logging.LogRecord) -> str:
    record.msg = yaml.dump([record.msg], allow_unicode=True).rstrip()
    return super().format(record)


sys_std_out = sys.stdout
sys_std_err = sys.stderr
logging.addLevelName(STD_OUTPUT_LEVELNO, "STD_OUTPUT")

logger = logging.getLogger('blindseg')
logger.setLevel(min(logging._checkLevel(settings.LOG_LEVEL_CONSOLE), logging._checkLevel(settings.LOG_LEVEL_FILE)))
logger_file = logging.getLogger('blindseg_file')
logger_file.setLevel(min(logging._checkLevel(settings.LOG_LEVEL_CONSOLE), logging._checkLevel(settings.LOG_LEVEL_FILE)))

ch_out = logging.StreamHandler(sys_std_out)
ch_out.setLevel(settings.LOG_LEVEL_CONSOLE)
ch_out.addFilter(NoErrorFilter())
ch_out.setFormatter(MainFormatter())
ch_err = logging.StreamHandler(sys_std_err)
ch_err.setLevel(settings.LOG_LEVEL_CONSOLE)
ch_err.addFilter(ErrorOnlyFilter())
ch_err.setFormatter(MainFormatter())
logger.addHandler(ch_out)
logger.addHandler(ch_err)

yaml_logger = logging.getLogger("yaml")
yaml_logger.setLevel(logging.INFO)

_preamble_content = []
def log_preamble(log_line: str, level: numbers.Integral = logging.INFO) -> None:
  """
  Log a message when no out_file is set. Once out_file is set, all preamble strings will be prepended to the out_file.

  Args:
    log_line: log message
    level: log level
  """
  _preamble_content.append(log_line)
  logger.log(level=level, msg=log_line)

def set_out_file(out_file: str) -> None:
  """
  Set the file to log to. Before calling this, logs are only passed to stdout/stderr.

  A second file ``{out_file}.yaml`` receives the machine-readable run summaries.

  Args:
    out_file: file name
  """
  unset_out_file()
  utils.make_parent_dir(out_file)
  with open(out_file, mode="w", encoding="utf-8") as f_out:
    for line in _preamble_content:
      f_out.write(f"{line}\n")
  fh = logging.FileHandler(out_file, encoding="utf-8")
  fh.setLevel(settings.LOG_LEVEL_FILE)
  fh.setFormatter(MainFormatter())
  logger.addHandler(fh)
  logger_file.addHandler(fh)
  yaml_fh = logging.FileHandler(f"{out_file}.yaml", mode='w', encoding="utf-8")
  yaml_fh.setLevel(logging.DEBUG)
  yaml_fh.setFormatter(YamlFormatter())
  yaml_logger.addHandler(yaml_fh)

def unset_out_file() -> None:
  """
  Unset the file to log to.
  """
  for hdlr in list(logger.handlers):
    if isinstance(hdlr, logging.FileHandler):
      hdlr.close()
      logger.removeHandler(hdlr)
  for hdlr in list(yaml_logger.handlers):
    if isinstance(hdlr, logging.FileHandler):
      hdlr.close()
      yaml_logger.removeHandler(hdlr)
  for hdlr in list(logger_file.handlers):
    hdlr.close()
    logger_file.removeHandler(hdlr)

class Tee(object):
  def __init__(self, error: bool = False) -> None:
    self.logger = logger
    self.stdstream = sys.stderr if error else sys.stdout
    self.error = error
    if error:
      sys.stderr = self
    else:
      sys.stdout = self

  def close(self) -> None:
    if self.error:
      sys.stderr = self.stdstream
    else:
      sys.stdout = self.stdstream

  def __enter__(self):
    return self

  def __exit__(self, exc_type, exc_val, exc_tb):
    self.close()

  def write(self, data: str) -> None:
    if data.strip()!="":
      if self.error:
        self.logger.error(data.rstrip())
      else:
        self.logger.log(STD_OUTPUT_LEVELNO, data.rstrip())
      self.flush()

  def flush(self) -> None:
    self.stdstream.flush()
