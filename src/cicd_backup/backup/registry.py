"""Container registry access.

The backup pipeline only reads container metadata. ContainerRegistry is the
read-only port it depends on; DockerContainerRegistry implements it with the
docker SDK.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import FrozenSet, List, Optional

import docker
import requests
from docker.errors import DockerException

from cicd_backup.backup.exceptions import RegistryUnavailableError, UnknownContainerStateError
from cicd_backup.backup.types import ContainerState

# docker-py lets transport errors from requests escape unwrapped
_UNREACHABLE = (DockerException, requests.RequestException)


@dataclass(frozen=True)
class ContainerSummary:
    """A container as listed by the runtime.

    identifiers are the runtime's full names (docker prefixes them with "/").
    """

    identifiers: FrozenSet[str]
    state: ContainerState


class ContainerRegistry(ABC):
    """Read-only view of the container runtime"""

    @abstractmethod
    def ping(self) -> None:
        """
        Check the runtime is reachable

        Raises:
            RegistryUnavailableError: If it cannot be reached
        """
        pass

    @abstractmethod
    def list_containers(self, name: str) -> List[ContainerSummary]:
        """
        List containers (running or not) whose name matches the filter

        The filter is a substring match on the runtime side; callers must
        compare identifiers exactly.
        """
        pass


class DockerContainerRegistry(ContainerRegistry):
    """ContainerRegistry backed by the local docker daemon"""

    def __init__(self, client: Optional["docker.DockerClient"] = None):
        self._client = client

    @property
    def client(self) -> "docker.DockerClient":
        if self._client is None:
            try:
                self._client = docker.from_env()
            except _UNREACHABLE as e:
                raise RegistryUnavailableError(e) from e
        return self._client

    def ping(self) -> None:
        try:
            self.client.ping()
        except _UNREACHABLE as e:
            raise RegistryUnavailableError(e) from e

    def list_containers(self, name: str) -> List[ContainerSummary]:
        try:
            containers = self.client.containers.list(all=True, filters={"name": name}, sparse=True)
        except _UNREACHABLE as e:
            raise RegistryUnavailableError(e) from e

        summaries = []
        for container in containers:
            names = frozenset(container.attrs.get("Names") or [])
            try:
                state = ContainerState(container.status)
            except ValueError:
                raise UnknownContainerStateError(name, str(container.status)) from None
            summaries.append(ContainerSummary(identifiers=names, state=state))
        return summaries


__all__ = [
    "ContainerSummary",
    "ContainerRegistry",
    "DockerContainerRegistry",
]
