"""Run command: load a job file, prepare its command and launch it."""

import json
import logging
import shlex
import sys
from argparse import Namespace
from pathlib import Path

from cmdexpand.exceptions import JobValidationError, ParseFailure
from cmdexpand.exec.launcher import CommandLauncher
from cmdexpand.loader import JobLoader

from .common import setup_logging


logger = logging.getLogger(__name__)


def run_job(args: Namespace) -> int:
    """Run a job file and return the child's exit code."""
    setup_logging(args)

    job_path = Path(args.job).resolve()
    if not job_path.exists():
        logger.error(f"Job file not found: {job_path}")
        return 1

    logger.info(f"Loading job: {job_path}")
    try:
        job = JobLoader().load(job_path)
    except JobValidationError as e:
        for error in e.errors:
            logger.error(f"Validation error: {error.message}")
        return e.exit_code

    launcher = CommandLauncher(workspace=job_path.parent, inherit_env=job.inherit_env)

    if args.dry_run:
        env = launcher.build_env(job.env)
        try:
            argv = launcher.prepare(job.command, env, job.advanced_parser)
        except ParseFailure as e:
            logger.error(f"Expansion failed: {e.message}")
            return e.exit_code
        if args.format == 'json':
            print(json.dumps({"argv": argv}))
        else:
            print(shlex.join(argv))
        return 0

    result = launcher.launch(
        job.command,
        env_declarations=job.env,
        cwd=job.cwd,
        timeout_sec=job.timeout_sec,
        use_advanced_parser=job.advanced_parser,
    )

    if result.error:
        logger.error(f"{result.error['type']}: {result.error['message']}")

    if args.format == 'json':
        print(json.dumps(result.to_dict(), indent=2))
    else:
        sys.stdout.write(result.stdout)
        sys.stderr.write(result.stderr)

    return result.exit_code
