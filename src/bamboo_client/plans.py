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

"""Plan listing, branch creation, disabling and plan variables."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from bamboo_client.errors import NotFoundError, PartialResultError, ValidationError
from bamboo_client.resources import Collection, Link
from bamboo_client.service import Service
from bamboo_client.utils import debug_log, empty_strings, log

PLANS_PATH = "plan.json"


@dataclass(frozen=True)
class PlanVariable:
    """A single build variable visible to a plan."""
    key: str = ""
    value: str = ""
    variable_type: str = ""
    is_password: bool = False

    @classmethod
    def from_api_response(cls, response_data: dict) -> 'PlanVariable':
        return cls(
            key=response_data.get('key', ''),
            value=response_data.get('value', ''),
            variable_type=response_data.get('variableType', ''),
            is_password=response_data.get('isPassword', False)
        )


class VariableList(tuple):
    """
    Immutable sequence of PlanVariable with lookup helpers.

    ``returned`` and ``total`` mirror the variable context's max-results and
    size. They differ when the server sent back only part of the variables.
    """

    def __new__(cls, variables=(), returned: Optional[int] = None, total: Optional[int] = None):
        instance = super().__new__(cls, variables)
        instance.returned = len(instance) if returned is None else returned
        instance.total = instance.returned if total is None else total
        return instance

    @property
    def is_complete(self) -> bool:
        return self.returned == self.total

    def get(self, name: str) -> str:
        """Return the value of the named variable, or an empty string if it is absent."""
        for variable in self:
            if variable.key == name:
                return variable.value
        return ""

    def get_or_fail(self, name: str) -> str:
        """Return the value of the named variable, raising NotFoundError if it is absent."""
        for variable in self:
            if variable.key == name:
                return variable.value
        raise NotFoundError(f"variable {name} not found")

    def to_map(self) -> Dict[str, str]:
        """
        Collapse into a key -> value dict.

        Lossy: variable types and password flags are dropped, and when a key
        appears more than once the last value wins.
        """
        return {variable.key: variable.value for variable in self}


@dataclass(frozen=True)
class VariableContext:
    """The paginated variable context returned by ``expand=variableContext``."""
    size: int = 0
    max_results: int = 0
    start_index: int = 0
    variables: VariableList = VariableList()

    @property
    def is_complete(self) -> bool:
        return self.max_results == self.size

    @classmethod
    def from_api_response(cls, response_data: Optional[dict]) -> Optional['VariableContext']:
        if response_data is None:
            return None
        envelope = Collection.from_api_response(response_data, 'variable', PlanVariable.from_api_response)
        return cls(
            size=envelope.size,
            max_results=envelope.max_results,
            start_index=envelope.start_index,
            variables=VariableList(envelope.items, returned=envelope.max_results, total=envelope.size)
        )


@dataclass(frozen=True)
class Plan:
    """Definition of a single build plan."""
    key: str = ""
    name: str = ""
    short_name: str = ""
    short_key: str = ""
    type: str = ""
    enabled: bool = False
    link: Optional[Link] = None
    plan_key: str = ""
    variable_context: Optional[VariableContext] = None

    @classmethod
    def from_api_response(cls, response_data: Optional[dict]) -> 'Plan':
        """Create instance from API response data."""
        response_data = response_data or {}
        plan_key = response_data.get('planKey') or {}
        return cls(
            key=response_data.get('key', ''),
            name=response_data.get('name', ''),
            short_name=response_data.get('shortName', ''),
            short_key=response_data.get('shortKey', ''),
            type=response_data.get('type', ''),
            enabled=response_data.get('enabled', False),
            link=Link.from_api_response(response_data.get('link')),
            plan_key=plan_key.get('key', ''),
            variable_context=VariableContext.from_api_response(response_data.get('variableContext'))
        )


class PlanService(Service):
    """Operations on build plans."""

    def _plans_request(self, max_results: int):
        request = self.client.new_request("GET", PLANS_PATH)
        request.params["max-results"] = str(max_results)
        return request

    def get_number(self):
        """
        Returns the number of plans on the server.

        Only one plan is requested; the envelope's size carries the total.

        Returns:
            tuple: (number of plans, response)

        Raises:
            UnexpectedStatusError: If the server does not answer 200
        """
        payload, response = self.client.do(self._plans_request(1))
        self.expect_status(response, 200, "Getting the number of plans")
        plans = Collection.from_api_response((payload or {}).get('plans'), 'plan')
        return plans.size, response

    def list(self) -> Tuple[Tuple[Plan, ...], object]:
        """
        Gets every plan on the server.

        The server pages plan listings, so the total is counted first and then
        requested as a single page. Plans created or deleted between the two
        requests are not reconciled; the second envelope is returned as-is.

        Returns:
            tuple: (plans, response)
        """
        num_plans, _ = self.get_number()
        debug_log(f"Requesting {num_plans} plans")

        payload, response = self.client.do(self._plans_request(num_plans))
        self.expect_status(response, 200, "Getting plan information")
        plans = Collection.from_api_response((payload or {}).get('plans'), 'plan', Plan.from_api_response)
        return plans.items, response

    def list_keys(self) -> Tuple[List[str], object]:
        """Returns the keys of all plans."""
        plans, response = self.list()
        return [plan.key for plan in plans], response

    def list_names(self) -> Tuple[List[str], object]:
        """Returns the short names of all plans."""
        plans, response = self.list()
        return [plan.short_name for plan in plans], response

    def names_map(self) -> Tuple[Dict[str, str], object]:
        """Returns a dict of plan key -> plan short name."""
        plans, response = self.list()
        return {plan.key: plan.short_name for plan in plans}, response

    def create_branch(self, plan_key: str, branch_name: str, vcs_branch: Optional[str] = None):
        """
        Creates a plan branch with the given name.

        Args:
            plan_key: Key of the plan to branch
            branch_name: Name of the plan branch
            vcs_branch: Optional repository branch the plan branch should build

        Returns:
            requests.Response: The server response; returning at all means the branch was created

        Raises:
            ValidationError: If plan_key or branch_name is empty
            UnexpectedStatusError: If the server does not answer 200
        """
        if empty_strings(plan_key, branch_name):
            raise ValidationError("Plan key and/or branch name cannot be empty")

        request = self.client.new_request("PUT", f"plan/{plan_key}/branch/{branch_name}.json")
        if vcs_branch:
            request.params["vcsBranch"] = vcs_branch

        _, response = self.client.do(request, decode=False)
        self.expect_status(response, 200, "Create")
        return response

    def disable(self, plan_key: str):
        """
        Disables a plan or plan branch.

        The response status is not checked here; callers that need to confirm
        the plan was disabled should look at ``response.status_code``.
        """
        self.require(plan_key, "Plan key")
        request = self.client.new_request("DELETE", f"plan/{plan_key}/enable")
        _, response = self.client.do(request, decode=False)
        return response

    def get_variables(self, plan_key: str, strict: bool = False) -> Tuple[VariableList, object]:
        """
        Returns the variables of a plan.

        A truncated variable context is not an error by default: a warning is
        logged and the returned list has ``is_complete`` set to False.

        Args:
            plan_key: Key of the plan (or plan branch)
            strict: Raise PartialResultError instead of returning a truncated list

        Returns:
            tuple: (VariableList, response)

        Raises:
            UnexpectedStatusError: If the server does not answer 200
            PartialResultError: Only when strict is set and the server returned
                part of the variable context; the variables are on ``items``
        """
        self.require(plan_key, "Plan key")
        request = self.client.new_request("GET", f"plan/{plan_key}")
        request.params["expand"] = "variableContext"

        payload, response = self.client.do(request)
        self.expect_status(response, 200, f"Getting variables for plan {plan_key}")

        plan = Plan.from_api_response(payload)
        context = plan.variable_context or VariableContext()
        if not context.is_complete:
            message = f"not all results were returned: {context.max_results} out of {context.size}"
            if strict:
                raise PartialResultError(
                    message,
                    items=context.variables,
                    returned=context.max_results,
                    total=context.size,
                    response=response
                )
            log(f"Variables for plan {plan_key}: {message}", is_warning=True)
        return context.variables, response
