#!/usr/bin/env python3
"""Back up the Jenkins and Nexus volumes of the CI/CD stack.

Each selected service's volume directory is zipped to
<BACKUP_DIRECTORY>/<volume>-backup.zip, and copied to
<BACKUP_HISTORY_DIRECTORY>/<volume>-backup-<YYYY-MM-DD>.zip when a history
directory is configured. The service's container must be stopped (exited)
unless --skipDockerCheck is given.

Usage:
    cicd-backup [--service jenkins|nexus ...] [--skipDockerCheck] [--keep-going]

Examples:
    # Back up everything
    cicd-backup

    # Only Nexus, on a host without access to the docker daemon
    cicd-backup -s nexus -d

Environment Variables (also read from .env):
    CICD_JENKINS_VOLUME         Jenkins "jenkins_home" directory (required)
    CICD_NEXUS_VOLUME           Nexus "nexus-data" directory (required)
    BACKUP_DIRECTORY            Where backup zips are written (required)
    BACKUP_HISTORY_DIRECTORY    Where dated copies are written (optional)
    LOG_LEVEL                   all|trace|debug|info|warn|error|fatal|mark|off (default: info)

Exit codes:
    0  every selected backup succeeded
    1  a backup failed
    2  configuration is missing or invalid
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from cicd_backup.backup import (
    BackupService,
    RunOptions,
    ServiceName,
    TqdmProgressReporter,
    select_jobs,
)
from cicd_backup.config import BackupSettings
from cicd_backup.exceptions import BackupToolError, ConfigurationError
from cicd_backup.logger import create_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cicd-backup",
        description="Back up CI/CD service volumes to zip archives",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-s",
        "--service",
        action="append",
        choices=[s.value for s in ServiceName],
        help="The service to limit performing backups for (repeatable)",
    )
    parser.add_argument(
        "-d",
        "--skipDockerCheck",
        "--skip-docker-check",
        dest="skip_docker_check",
        action="store_true",
        help="Do not check that the service's docker container is stopped",
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Attempt every backup even if one fails (default: stop at the first failure)",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        help="Read environment values from this file instead of ./.env",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not display progress bars",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = BackupSettings.from_env(env_file=args.env_file)
    except ConfigurationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2

    logger = create_logger("cicd-backup", level=settings.log_level)

    jobs = select_jobs(settings.jobs(), args.service, logger=logger)
    options = RunOptions(
        backup_directory=settings.backup_directory,
        history_directory=settings.history_directory,
        skip_docker_check=args.skip_docker_check,
        keep_going=args.keep_going,
    )
    service = BackupService(
        options,
        progress_factory=lambda job: TqdmProgressReporter(
            description=job.service.value,
            disable=True if args.no_progress else None,
        ),
        logger=logger,
    )

    try:
        report = service.run(jobs)
    except BackupToolError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not report.succeeded:
        for failure in report.failures:
            print(f"Error: {failure.error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
