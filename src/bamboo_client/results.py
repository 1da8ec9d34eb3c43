# -
# #%L
# Bamboo REST Client
# %%
# Copyright (C) 2025 Contrast Security, Inc.
# %%
# Contact: support@contrastsecurity.com
# License: Commercial
# NOTICE: This Software and the patented inventions embodied within may only be
# used as part of Contrast Security's commercial offerings. Even though it is
# made available through public repositories, use of this Software is subject to
# the applicable End User Licensing Agreement found at
# https://www.contrastsecurity.com/enduser-terms-0317a or as otherwise agreed
# between Contrast Security and the End User. The Software may not be reverse
# engineered, modified, repackaged, sold, redistributed or otherwise used in a
# way not consistent with the End User License Agreement.
# #L%
#

"""Build results and the nested stage, artifact and test detail they can expand into."""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple, Union

from bamboo_client.plans import Plan
from bamboo_client.resources import Collection, Link
from bamboo_client.service import Service

# Expansions accepted by get_expanded / get_latest_expanded
EXPAND_RESULTS = "stages.stage.results.result"
EXPAND_VARIABLES = "variables"
EXPAND_ARTIFACTS = "artifacts"
EXPAND_FAILED_TEST_RESULTS = "stages.stage.results.result.testResults.failedTests.testResult.errors"

LATEST = "latest"


@dataclass(frozen=True)
class Change:
    """Author and commit hash of a source code change."""
    author: str = ""
    changeset_id: str = ""

    @classmethod
    def from_api_response(cls, response_data: dict) -> 'Change':
        return cls(
            author=response_data.get('author', ''),
            changeset_id=response_data.get('changesetId', '')
        )


@dataclass(frozen=True)
class Artifact:
    name: str = ""
    link: Optional[Link] = None
    producer_job_key: str = ""
    shared: bool = False
    size: int = 0
    pretty_size_description: str = ""

    @classmethod
    def from_api_response(cls, response_data: dict) -> 'Artifact':
        return cls(
            name=response_data.get('name', ''),
            link=Link.from_api_response(response_data.get('link')),
            producer_job_key=response_data.get('producerJobKey', ''),
            shared=response_data.get('shared', False),
            size=response_data.get('size', 0),
            pretty_size_description=response_data.get('prettySizeDescription', '')
        )


def _error_message(response_data: dict) -> str:
    return response_data.get('message', '')


@dataclass(frozen=True)
class TestDetail:
    """One test case run as part of a job."""
    __test__ = False

    test_case_id: int = 0
    class_name: str = ""
    method_name: str = ""
    status: str = ""
    duration: int = 0
    duration_in_seconds: int = 0
    errors: Collection = field(default_factory=Collection)

    @classmethod
    def from_api_response(cls, response_data: dict) -> 'TestDetail':
        return cls(
            test_case_id=response_data.get('testCaseId', 0),
            class_name=response_data.get('className', ''),
            method_name=response_data.get('methodName', ''),
            status=response_data.get('status', ''),
            duration=response_data.get('duration', 0),
            duration_in_seconds=response_data.get('durationInSeconds', 0),
            errors=Collection.from_api_response(response_data.get('errors'), 'error', _error_message)
        )


def _test_details(response_data: Optional[dict]) -> Collection:
    return Collection.from_api_response(response_data, 'testResult', TestDetail.from_api_response)


@dataclass(frozen=True)
class TestResults:
    """Test counters for a result, with per-test detail when expanded."""
    __test__ = False

    expand: str = ""
    all: int = 0
    successful: int = 0
    failed: int = 0
    new_failed: int = 0
    existing_failed: int = 0
    fixed: int = 0
    quarantined: int = 0
    skipped: int = 0
    all_tests: Collection = field(default_factory=Collection)
    successful_tests: Collection = field(default_factory=Collection)
    failed_tests: Collection = field(default_factory=Collection)
    new_failed_tests: Collection = field(default_factory=Collection)
    existing_failed_tests: Collection = field(default_factory=Collection)
    fixed_tests: Collection = field(default_factory=Collection)
    quarantined_tests: Collection = field(default_factory=Collection)
    skipped_tests: Collection = field(default_factory=Collection)

    @classmethod
    def from_api_response(cls, response_data: Optional[dict]) -> 'TestResults':
        response_data = response_data or {}
        return cls(
            expand=response_data.get('expand', ''),
            all=response_data.get('all', 0),
            successful=response_data.get('successful', 0),
            failed=response_data.get('failed', 0),
            new_failed=response_data.get('newFailed', 0),
            existing_failed=response_data.get('existingFailed', 0),
            fixed=response_data.get('fixed', 0),
            quarantined=response_data.get('quarantined', 0),
            skipped=response_data.get('skipped', 0),
            all_tests=_test_details(response_data.get('allTests')),
            successful_tests=_test_details(response_data.get('successfulTests')),
            failed_tests=_test_details(response_data.get('failedTests')),
            new_failed_tests=_test_details(response_data.get('newFailedTests')),
            existing_failed_tests=_test_details(response_data.get('existingFailedTests')),
            fixed_tests=_test_details(response_data.get('fixedTests')),
            quarantined_tests=_test_details(response_data.get('quarantinedTests')),
            skipped_tests=_test_details(response_data.get('skippedTests'))
        )


@dataclass(frozen=True)
class Stage:
    id: int = 0
    name: str = ""
    description: str = ""
    expand: str = ""
    life_cycle_state: str = ""
    state: str = ""
    display_class: str = ""
    display_message: str = ""
    collapsed_by_default: bool = False
    manual: bool = False
    restartable: bool = False
    runnable: bool = False
    results: Collection = field(default_factory=Collection)

    @classmethod
    def from_api_response(cls, response_data: dict) -> 'Stage':
        return cls(
            id=response_data.get('id', 0),
            name=response_data.get('name', ''),
            description=response_data.get('description', ''),
            expand=response_data.get('expand', ''),
            life_cycle_state=response_data.get('lifeCycleState', ''),
            state=response_data.get('state', ''),
            display_class=response_data.get('displayClass', ''),
            display_message=response_data.get('displayMessage', ''),
            collapsed_by_default=response_data.get('collapsedByDefault', False),
            manual=response_data.get('manual', False),
            restartable=response_data.get('restartable', False),
            runnable=response_data.get('runnable', False),
            # Job results nest inside their stage
            results=Collection.from_api_response(response_data.get('results'), 'result', Result.from_api_response)
        )


@dataclass(frozen=True)
class Result:
    """
    Snapshot of a single build result.

    Stages, artifacts and per-test detail are only populated when the request
    asked for the matching expansion; otherwise they are empty collections.
    """
    id: int = 0
    key: str = ""
    number: int = 0
    build_number: int = 0
    build_result_key: str = ""
    plan_name: str = ""
    project_name: str = ""
    life_cycle_state: str = ""
    state: str = ""
    build_state: str = ""
    build_started_time: str = ""
    build_completed_time: str = ""
    build_duration_in_seconds: int = 0
    vcs_revision_key: str = ""
    build_test_summary: str = ""
    successful_test_count: int = 0
    failed_test_count: int = 0
    quarantined_test_count: int = 0
    skipped_test_count: int = 0
    finished: bool = False
    successful: bool = False
    build_reason: str = ""
    reason_summary: str = ""
    log_files: Tuple[str, ...] = ()
    changes: Tuple[Change, ...] = ()
    stages: Collection = field(default_factory=Collection)
    artifacts: Collection = field(default_factory=Collection)
    test_results: TestResults = field(default_factory=TestResults)
    master: Optional[Plan] = None
    plan: Optional[Plan] = None

    @property
    def changeset_ids(self) -> Tuple[str, ...]:
        return tuple(change.changeset_id for change in self.changes)

    @classmethod
    def from_api_response(cls, response_data: Optional[dict]) -> 'Result':
        """Create instance from API response data."""
        response_data = response_data or {}
        changes = (response_data.get('changes') or {}).get('change') or []
        master = response_data.get('master')
        plan = response_data.get('plan')
        return cls(
            id=response_data.get('id', 0),
            key=response_data.get('key', ''),
            number=response_data.get('number', 0),
            build_number=response_data.get('buildNumber', 0),
            build_result_key=response_data.get('buildResultKey', ''),
            plan_name=response_data.get('planName', ''),
            project_name=response_data.get('projectName', ''),
            life_cycle_state=response_data.get('lifeCycleState', ''),
            state=response_data.get('state', ''),
            build_state=response_data.get('buildState', ''),
            build_started_time=response_data.get('buildStartedTime', ''),
            build_completed_time=response_data.get('buildCompletedTime', ''),
            build_duration_in_seconds=response_data.get('buildDurationInSeconds', 0),
            vcs_revision_key=response_data.get('vcsRevisionKey', ''),
            build_test_summary=response_data.get('buildTestSummary', ''),
            successful_test_count=response_data.get('successfulTestCount', 0),
            failed_test_count=response_data.get('failedTestCount', 0),
            quarantined_test_count=response_data.get('quarantinedTestCount', 0),
            skipped_test_count=response_data.get('skippedTestCount', 0),
            finished=response_data.get('finished', False),
            successful=response_data.get('successful', False),
            build_reason=response_data.get('buildReason', ''),
            reason_summary=response_data.get('reasonSummary', ''),
            log_files=tuple(response_data.get('logFiles') or ()),
            changes=tuple(Change.from_api_response(change) for change in changes),
            stages=Collection.from_api_response(response_data.get('stages'), 'stage', Stage.from_api_response),
            artifacts=Collection.from_api_response(response_data.get('artifacts'), 'artifact', Artifact.from_api_response),
            test_results=TestResults.from_api_response(response_data.get('testResults')),
            master=Plan.from_api_response(master) if master else None,
            plan=Plan.from_api_response(plan) if plan else None
        )


class ResultService(Service):
    """Read-only access to build results. Nothing is cached between calls."""

    def _get_result(self, key: str, expand: Union[str, Iterable[str], None] = None):
        request = self.client.new_request("GET", f"result/{key}")
        if expand is not None:
            if isinstance(expand, str):
                expand = [expand]
            request.params["expand"] = ",".join(expand)
            request.params["includeAllStates"] = "true"

        payload, response = self.client.do(request)
        self.expect_status(response, 200, "API")
        return Result.from_api_response(payload), response

    def numbered(self, plan_key: str, build_number: Optional[int] = None):
        """
        Returns one result of a plan.

        Args:
            plan_key: Key of the plan (or plan branch)
            build_number: Build number; the latest result is returned when omitted

        Returns:
            tuple: (Result, response)
        """
        self.require(plan_key, "Plan key")
        number = LATEST if build_number is None else build_number
        return self._get_result(f"{plan_key}-{number}")

    def latest(self, plan_key: str):
        """Returns the latest result of a plan."""
        return self.numbered(plan_key)

    def list_results(self, plan_key: str):
        """
        Lists the results of a plan.

        Only the single page the server sends back is returned; no attempt is
        made to fetch further pages.

        Returns:
            tuple: (results, response)
        """
        self.require(plan_key, "Plan key")
        request = self.client.new_request("GET", f"result/{plan_key}")
        payload, response = self.client.do(request)
        self.expect_status(response, 200, "API")
        results = Collection.from_api_response((payload or {}).get('results'), 'result', Result.from_api_response)
        return results.items, response

    def get_expanded(self, result_key: str, expand: Union[str, Iterable[str]]):
        """
        Returns a result with the requested expansions, e.g. EXPAND_ARTIFACTS.

        Args:
            result_key: Full result key such as PROJ-PLAN-12
            expand: One expansion name or several, joined with commas in the query
        """
        self.require(result_key, "Result key")
        return self._get_result(result_key, expand=expand)

    def get_latest_expanded(self, plan_key: str, expand: Union[str, Iterable[str]]):
        """Returns the latest result of a plan with the requested expansions."""
        self.require(plan_key, "Plan key")
        return self._get_result(f"{plan_key}-{LATEST}", expand=expand)
