"""Tests for the exception hierarchy.

These tests verify:
1. Exception structure (code, message, details)
2. Inheritance hierarchy
3. String representation
4. Dictionary conversion for JSON serialization
"""

from pathlib import Path

import pytest

from cicd_backup.backup.exceptions import (
    AmbiguousContainerError,
    ArchiveIOError,
    HistoryCopyError,
    HistoryDirectoryMissingError,
    JobFailedError,
    RegistryUnavailableError,
    SourceNotFoundError,
    StatePreconditionError,
    UnknownContainerStateError,
    VolumeNotFoundError,
)
from cicd_backup.exceptions import (
    ArtifactError,
    BackupToolError,
    ConfigurationError,
    PreconditionError,
    RegistryError,
    ResourceNotFoundError,
)


class TestBackupToolError:
    """Tests for base BackupToolError class."""

    def test_basic_construction(self):
        error = BackupToolError("TEST_CODE", "Test message")

        assert error.code == "TEST_CODE"
        assert error.message == "Test message"
        assert error.details == {}

    def test_str_without_details(self):
        assert str(BackupToolError("TEST_CODE", "Test message")) == "TEST_CODE: Test message"

    def test_str_with_details(self):
        result = str(BackupToolError("TEST_CODE", "Test message", details={"foo": "bar"}))

        assert result.startswith("TEST_CODE: Test message")
        assert "foo" in result and "bar" in result

    def test_to_dict(self):
        error = BackupToolError("CODE", "msg", {"k": 1})
        assert error.to_dict() == {"code": "CODE", "message": "msg", "details": {"k": 1}}

    def test_args_contains_message(self):
        assert "The error message" in BackupToolError("CODE", "The error message").args

    def test_registry_error_message_first(self):
        error = RegistryError("lookup failed")
        assert error.code == "REGISTRY_ERROR"
        assert error.message == "lookup failed"


class TestBackupErrors:
    """Tests for the backup pipeline errors."""

    @pytest.mark.parametrize(
        "error, base, code",
        [
            (RegistryUnavailableError("refused"), RegistryError, "REGISTRY_UNAVAILABLE"),
            (AmbiguousContainerError("c", [{"/c"}, {"/c"}]), RegistryError, "AMBIGUOUS_CONTAINER"),
            (UnknownContainerStateError("c", "odd"), RegistryError, "UNKNOWN_CONTAINER_STATE"),
            (StatePreconditionError("c", "running", "exited"), PreconditionError, "STATE_PRECONDITION_FAILED"),
            (SourceNotFoundError(Path("/s")), ResourceNotFoundError, "SOURCE_NOT_FOUND"),
            (VolumeNotFoundError(Path("/v")), ResourceNotFoundError, "VOLUME_NOT_FOUND"),
            (HistoryDirectoryMissingError(Path("/h")), ResourceNotFoundError, "HISTORY_DIRECTORY_MISSING"),
            (ArchiveIOError(Path("/s"), Path("/o"), OSError("x")), ArtifactError, "ARCHIVE_IO_ERROR"),
            (HistoryCopyError(Path("/o"), Path("/h"), OSError("x")), ArtifactError, "HISTORY_COPY_FAILED"),
        ],
    )
    def test_codes_and_bases(self, error, base, code):
        assert isinstance(error, base)
        assert isinstance(error, BackupToolError)
        assert error.code == code

    def test_state_precondition_message(self):
        error = StatePreconditionError("cicd_jenkins_1", "running", "exited")
        assert error.message == (
            "Container 'cicd_jenkins_1' state of 'running' is not in the required state of 'exited'"
        )

    def test_volume_not_found_message(self):
        error = VolumeNotFoundError(Path("/srv/jenkins_home"))
        assert error.message == "Volume path of '/srv/jenkins_home' does not exist."
        assert error.details == {"path": "/srv/jenkins_home"}

    def test_job_failed_wraps_stage_error(self):
        stage_error = VolumeNotFoundError(Path("/v"))
        error = JobFailedError("nexus", "checking volume", stage_error, container="cicd_nexus_1")

        assert error.code == "JOB_FAILED"
        assert error.error is stage_error
        assert error.details["stage"] == "checking volume"
        assert error.details["container"] == "cicd_nexus_1"
        assert error.details["error"]["code"] == "VOLUME_NOT_FOUND"

    def test_configuration_error_is_not_a_job_error(self):
        assert not issubclass(ConfigurationError, (RegistryError, ArtifactError))
