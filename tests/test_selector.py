"""Tests for service selection."""

from pathlib import Path

import pytest

from cicd_backup.backup import BackupJob, ServiceName, select_jobs

JENKINS = BackupJob(ServiceName.JENKINS, "cicd_jenkins_1", Path("/srv/jenkins_home"))
NEXUS = BackupJob(ServiceName.NEXUS, "cicd_nexus_1", Path("/srv/nexus-data"))


class TestSelectJobs:
    """Tests for select_jobs"""

    def test_no_filter_returns_all_in_order(self, logger):
        assert select_jobs([JENKINS, NEXUS], None, logger=logger) == [JENKINS, NEXUS]

    def test_list_filter(self, logger):
        assert select_jobs([JENKINS, NEXUS], ["nexus"], logger=logger) == [NEXUS]

    def test_single_name_filter(self, logger):
        assert select_jobs([JENKINS, NEXUS], "jenkins", logger=logger) == [JENKINS]

    def test_enum_filter(self, logger):
        assert select_jobs([JENKINS, NEXUS], ServiceName.NEXUS, logger=logger) == [NEXUS]

    @pytest.mark.parametrize("services", [["nexus", "jenkins"], {"jenkins", "nexus"}])
    def test_preserves_job_order_not_filter_order(self, logger, services):
        assert select_jobs([JENKINS, NEXUS], services, logger=logger) == [JENKINS, NEXUS]

    def test_unknown_names_are_ignored(self, logger):
        assert select_jobs([JENKINS, NEXUS], ["gitlab"], logger=logger) == []

    def test_excluded_services_are_logged(self, logger):
        select_jobs([JENKINS, NEXUS], ["nexus"], logger=logger)

        debug = logger.messages("DEBUG")
        assert len(debug) == 1
        assert "'jenkins'" in debug[0]
