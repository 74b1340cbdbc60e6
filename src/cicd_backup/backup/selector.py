"""Service selection for a backup run."""

from typing import Iterable, List, Optional, Sequence, Union

from cicd_backup.backup.types import BackupJob, ServiceName
from cicd_backup.logger import Logger, get_logger

ServiceFilter = Union[ServiceName, str, Iterable[Union[ServiceName, str]], None]


def _normalize(services: ServiceFilter) -> Optional[set]:
    if services is None:
        return None
    if isinstance(services, (ServiceName, str)):
        services = [services]
    return {s.value if isinstance(s, ServiceName) else str(s) for s in services}


def select_jobs(
    jobs: Sequence[BackupJob],
    services: ServiceFilter = None,
    logger: Optional[Logger] = None,
) -> List[BackupJob]:
    """Jobs whose service is in ``services``, in their original order.

    With no filter every job is selected. Names without a matching job are
    ignored.
    """
    wanted = _normalize(services)
    if wanted is None:
        return list(jobs)

    logger = logger or get_logger()
    selected = []
    for job in jobs:
        if job.service.value in wanted:
            selected.append(job)
        else:
            logger.debug(
                f"Not including service '{job.service.value}' due to a '--service' flag "
                "present in command that does not include it"
            )
    return selected
