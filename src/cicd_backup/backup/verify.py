"""Container state verification

Checks that the container owning a volume is in the required lifecycle state
before its volume is archived.
"""

from typing import Callable, List, Optional

from cicd_backup.backup.exceptions import AmbiguousContainerError, StatePreconditionError
from cicd_backup.backup.registry import ContainerRegistry, ContainerSummary
from cicd_backup.backup.types import REQUIRED_STATE, ContainerState
from cicd_backup.logger import Logger, get_logger


class ContainerStateVerifier:
    """Verifies a container's lifecycle state through a ContainerRegistry.

    The registry is created lazily, so a run with the check skipped never
    touches the container runtime.
    """

    def __init__(
        self,
        registry_factory: Callable[[], ContainerRegistry],
        logger: Optional[Logger] = None,
    ):
        self._registry_factory = registry_factory
        self._registry: Optional[ContainerRegistry] = None
        self.logger = logger or get_logger()

    @property
    def registry(self) -> ContainerRegistry:
        if self._registry is None:
            self._registry = self._registry_factory()
        return self._registry

    def find_container(self, name: str) -> Optional[ContainerSummary]:
        """Find the container named exactly ``name``

        Returns:
            The container, or None if nothing carries that name

        Raises:
            RegistryUnavailableError: If the runtime can't be reached
            AmbiguousContainerError: If several containers carry the name
        """
        self.registry.ping()

        listed = self.registry.list_containers(name)
        # the runtime filter also returns partial matches
        matches: List[ContainerSummary] = [c for c in listed if f"/{name}" in c.identifiers]
        self.logger.trace(
            f"Registry returned {len(listed)} container(s) for '{name}', {len(matches)} exact",
        )

        if len(matches) > 1:
            raise AmbiguousContainerError(name, [m.identifiers for m in matches])
        return matches[0] if matches else None

    def verify(
        self,
        container_name: str,
        required_state: ContainerState = REQUIRED_STATE,
        skip_check: bool = False,
    ) -> None:
        """Ensure ``container_name`` is in ``required_state``

        A container that doesn't exist passes: its volume can't be in use.

        Raises:
            RegistryUnavailableError: If the runtime can't be reached
            AmbiguousContainerError: If several containers carry the name
            StatePreconditionError: If the container is in another state
        """
        if skip_check:
            self.logger.trace("Not checking container state due to --skipDockerCheck flag")
            return

        container = self.find_container(container_name)
        if container is None:
            self.logger.debug(
                f"No container named '{container_name}' found, proceeding without state check"
            )
            return

        if container.state is not required_state:
            raise StatePreconditionError(
                container_name, container.state.value, required_state.value
            )
        self.logger.debug(
            f"Container '{container_name}' is {container.state.value}",
            container=container_name,
        )
