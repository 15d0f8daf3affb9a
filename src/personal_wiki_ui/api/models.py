"""
Wiki Action Models

This module defines the Pydantic models and small value types exchanged
between the UI controller and the Wiki Resource Endpoint.

Design Goals
------------
- Request bodies serialize to exactly the keys the endpoint expects
- Input values travel verbatim (no trimming or normalization)
- Response parsing yields an explicit tagged result instead of a silent no-op
- Credentials never appear in repr() or log output
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError


# ---------------------------------------------------------------------
# UI-Side Input
# ---------------------------------------------------------------------

class ActionRequest(BaseModel):
    """
    Raw values read from the identity, credential and content fields.
    """
    identity: str = ""
    credential: str = Field(default="", repr=False)
    content: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    def missing_fields(self, requires_content: bool) -> list[str]:
        """Return the names of required fields that are empty."""
        missing = []
        if not self.identity:
            missing.append("username")
        if not self.credential:
            missing.append("password")
        if requires_content and not self.content:
            missing.append("wiki")
        return missing


# ---------------------------------------------------------------------
# Wire Bodies
# ---------------------------------------------------------------------

class CreateOrUpdateWikiRequest(BaseModel):
    """
    Body of POST /wikis and PATCH /wikis.
    """
    username: str
    content: str
    password: str = Field(..., repr=False)

    model_config = ConfigDict(extra="forbid")


class DeleteWikiRequest(BaseModel):
    """
    Body of DELETE /wikis.
    """
    username: str
    password: str = Field(..., repr=False)

    model_config = ConfigDict(extra="forbid")


class ActionResponse(BaseModel):
    """
    Body returned by the endpoint for every mutating request.

    ``url`` is only sent for create/update and is ignored by the controller,
    which builds the public link itself. ``error`` is only ever rendered
    into text, so any JSON value is accepted for both.

    ``success`` must be a JSON boolean. Strings and numbers are not coerced
    (``"false"`` would otherwise read as a failure); such a body is
    malformed.
    """
    success: StrictBool
    error: Any = None
    url: Any = None


# ---------------------------------------------------------------------
# Tagged Parse Result
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class ParsedResponse:
    response: ActionResponse


@dataclass(frozen=True)
class MalformedResponse:
    reason: str
    payload: Any = None


ParseResult = Union[ParsedResponse, MalformedResponse]

CREATE_OR_UPDATE_KEYS: Tuple[str, ...] = ("success", "error", "url")
DELETE_KEYS: Tuple[str, ...] = ("success", "error")


def parse_action_response(payload: Any, required_keys: Tuple[str, ...]) -> ParseResult:
    """
    Validate a decoded JSON body against the keys an action requires.

    Keys must be present but may hold ``null``. Anything else (a non-object
    body, a missing key, a ``success`` that is not a boolean) is malformed.
    """
    if not isinstance(payload, dict):
        return MalformedResponse(
            reason=f"expected a JSON object, got {type(payload).__name__}",
            payload=payload,
        )

    missing = [key for key in required_keys if key not in payload]
    if missing:
        return MalformedResponse(
            reason=f"missing keys: {', '.join(missing)}",
            payload=payload,
        )

    try:
        return ParsedResponse(ActionResponse.model_validate(payload))
    except ValidationError as exc:
        return MalformedResponse(reason=str(exc), payload=payload)


# ---------------------------------------------------------------------
# Control State
# ---------------------------------------------------------------------

class ControlState(str, Enum):
    RESTING = "resting"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ActionKind(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class ActionSpec:
    """
    Everything that differs between the create, update and delete flows.
    """
    kind: ActionKind
    control_id: str
    method: str
    requires_content: bool
    shows_link: bool
    resting_label: str
    in_flight_label: str
    success_label: str
    required_keys: Tuple[str, ...]


ACTION_SPECS = {
    ActionKind.CREATE: ActionSpec(
        kind=ActionKind.CREATE,
        control_id="createWiki",
        method="POST",
        requires_content=True,
        shows_link=True,
        resting_label="Create Wiki",
        in_flight_label="Creating wiki...",
        success_label="Created Wiki!",
        required_keys=CREATE_OR_UPDATE_KEYS,
    ),
    ActionKind.UPDATE: ActionSpec(
        kind=ActionKind.UPDATE,
        control_id="updateWiki",
        method="PATCH",
        requires_content=True,
        shows_link=True,
        resting_label="Update Wiki",
        in_flight_label="Updating wiki...",
        success_label="Updated Wiki!",
        required_keys=CREATE_OR_UPDATE_KEYS,
    ),
    ActionKind.DELETE: ActionSpec(
        kind=ActionKind.DELETE,
        control_id="deleteWiki",
        method="DELETE",
        requires_content=False,
        shows_link=False,
        resting_label="Delete Wiki",
        in_flight_label="Deleting wiki...",
        success_label="Deleted Wiki!",
        required_keys=DELETE_KEYS,
    ),
}


@dataclass(frozen=True)
class ActionOutcome:
    """
    Terminal (or stuck) state an action invocation reached.

    ``error`` is None on success and for ignored clicks.
    """
    kind: ActionKind
    state: ControlState
    requested: bool
    error: Optional[Exception] = None
