#!/usr/bin/env python3

"""
Reads run descriptions in the passed YAML file and runs them sequentially, logging outputs
"""
import argparse
import datetime
import os
import socket
import sys
import traceback
from typing import Optional, Sequence, Tuple

from blindseg.settings import settings
from blindseg import logger, file_logger, tee, utils
from blindseg.tee import log_preamble
from blindseg.persistence import RunLoader, save_to_file, initialize_if_needed
from blindseg.tasks import RunResult

def main(overwrite_args: Optional[Sequence[str]] = None) -> None:

  with tee.Tee(), tee.Tee(error=True):
    argparser = argparse.ArgumentParser()
    argparser.add_argument("--settings", type=str, default="standard", help="settings (standard, debug, or unittest)"
                                                                            "must be given in '=' syntax, e.g."
                                                                            " --settings=standard")
    argparser.add_argument("runs_file")
    argparser.add_argument("run_name", nargs='*', help="Run only the specified runs")
    args = argparser.parse_args(overwrite_args)

    config_run_names = RunLoader.run_names_from_file(args.runs_file)

    results = []

    # Check ahead of time that all runs exist, to avoid bad surprises
    run_names = args.run_name or config_run_names

    if args.run_name:
      nonexistent = set(run_names).difference(config_run_names)
      if len(nonexistent) != 0:
        raise ValueError("Runs {} do not exist".format(",".join(sorted(nonexistent))))

    log_preamble(f"running blindseg on {socket.gethostname()} on {datetime.datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    for run_name in run_names:

      uninitialized_task = RunLoader.load_run_from_file(args.runs_file, run_name)

      logger.info(f"=> Running {run_name}")

      log_file = uninitialized_task.get("log_file", None)
      if log_file is None:
        raise ValueError(f"run '{run_name}' is not a counting task")

      if os.path.isfile(log_file) and not settings.OVERWRITE_LOG:
        logger.warning(f"log file {log_file} already exists, skipping run; please delete log file by hand if you want to overwrite it "
                       f"(or activate OVERWRITE_LOG, by either specifying an environment variable as OVERWRITE_LOG=1, "
                       f"or specifying --settings=debug, or changing blindseg.settings.Standard.OVERWRITE_LOG manually)")
        continue

      tee.set_out_file(log_file)

      try:
        task = initialize_if_needed(uninitialized_task)
        save_to_file(f"{log_file}.config.yaml", task)

        with utils.ReportOnException({"run": run_name, "corpus": task.corpus}):
          result = task.run()
        results.append((run_name, result))
        print_results(results)

      except Exception as e:
        file_logger.error(traceback.format_exc())
        raise e
      finally:
        tee.unset_out_file()

def print_results(results: Sequence[Tuple[str, RunResult]]) -> None:
  print("")
  print("{:<30}|{:<10}|{:<40}".format("Run", " Entries", " Output"))
  print("-" * (80 + 2))

  for run_name, result in results:
    print("{:<30}| {:<9}| {:<40}".format(run_name, len(result), result.out_path))


if __name__ == '__main__':
  sys.exit(main())
