"""Bamboo REST Client

Typed client for the Atlassian Bamboo REST API: plans, plan branches and
variables, build results, result comments and raw GET passthrough.

Example usage:
    ```python
    from bamboo_client import BambooClient
    from bamboo_client.results import EXPAND_ARTIFACTS

    client = BambooClient.simple("https://bamboo.example.com", "user", "secret")

    keys, response = client.plans.list_keys()
    result, response = client.results.get_latest_expanded("PROJ-PLAN", [EXPAND_ARTIFACTS])
    client.comments.add_comment(result.key, "Deployed to staging")
    ```

Variables may come back truncated. The list says so, or pass strict=True to
get a PartialResultError instead:
    ```python
    variables, response = client.plans.get_variables("PROJ-PLAN")
    if not variables.is_complete:
        print(f"only {variables.returned} of {variables.total} variables")
    ```
"""

from bamboo_client.client import BambooClient
from bamboo_client.comments import Comment
from bamboo_client.config import BambooConfig
from bamboo_client.errors import (
    BambooError,
    BodyReadError,
    ConstructionError,
    DecodeError,
    NotFoundError,
    PartialResultError,
    TransportError,
    UnexpectedStatusError,
    ValidationError,
)
from bamboo_client.plans import Plan, PlanVariable, VariableContext, VariableList
from bamboo_client.resources import Collection, Link, ResourceMetadata
from bamboo_client.results import Artifact, Change, Result, Stage, TestDetail, TestResults

__version__ = "0.4.1"
__author__ = "Contrast Security"
__description__ = "Typed client for the Bamboo REST API"

__all__ = [
    # Metadata
    "__version__",
    "__author__",
    "__description__",

    # Client
    "BambooClient",
    "BambooConfig",

    # Errors
    "BambooError",
    "BodyReadError",
    "ConstructionError",
    "DecodeError",
    "NotFoundError",
    "PartialResultError",
    "TransportError",
    "UnexpectedStatusError",
    "ValidationError",

    # Resource shapes
    "Artifact",
    "Change",
    "Collection",
    "Comment",
    "Link",
    "Plan",
    "PlanVariable",
    "ResourceMetadata",
    "Result",
    "Stage",
    "TestDetail",
    "TestResults",
    "VariableContext",
    "VariableList",
]
