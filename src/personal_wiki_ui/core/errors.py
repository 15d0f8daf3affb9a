"""
Action Error Taxonomy

This module defines the failures a wiki action can end in and how each one
is rendered into the shared result display.

Design Goals
------------
- Every failure is raised inside a single action flow and handled at that
  action's boundary; nothing reaches a global handler
- The user only ever sees the fixed guidance string or the server's own
  error text
- Transport and shape failures are logged, never rendered by default
"""

from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger("wiki.errors")


MISSING_FIELDS_MESSAGE = (
    "Please make sure to have filled out the username, "
    "the password and the wiki text fields"
)

TRANSPORT_FAILURE_MESSAGE = "the wiki service could not be reached"


# ---------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------

def render_error_value(value: Any) -> str:
    """
    Render a decoded JSON ``error`` value as text.

    Scalars render as their JSON spelling (``null``, ``true``, ``42``,
    ``1.5``); strings pass through unchanged; arrays and objects render as
    compact JSON.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

class WikiActionError(Exception):
    """Base class for every failure of a create/update/delete action."""

    def display_text(self) -> str:
        raise NotImplementedError


class LocalValidationError(WikiActionError):
    """A required input field was empty; no request was sent."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"missing required fields: {', '.join(missing)}")
        self.missing = missing

    def display_text(self) -> str:
        return MISSING_FIELDS_MESSAGE


class RemoteBusinessError(WikiActionError):
    """The endpoint answered well-formed JSON with ``success`` false."""

    def __init__(self, error: Any) -> None:
        super().__init__(error)
        self.error = error

    def display_text(self) -> str:
        return f"An error occurred: {render_error_value(self.error)}"


class TransportOrShapeError(WikiActionError):
    """
    Non-2xx status, unreachable endpoint, undecodable body, or a body that
    lacks the keys the action requires.
    """

    def __init__(self, reason: str, payload: Any = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.payload = payload

    def display_text(self) -> str:
        return f"An error occurred: {TRANSPORT_FAILURE_MESSAGE}"


# ---------------------------------------------------------------------
# Logging Helper
# ---------------------------------------------------------------------

def log_action_error(action: str, username: str, exc: WikiActionError) -> None:
    """
    Log a handled action failure at the level its category deserves.

    Parameters
    ----------
    action : str
        Action name ("create", "update", "delete").

    username : str
        Identity the request was made for. Credentials are never logged.

    exc : WikiActionError
        The handled failure.
    """
    if isinstance(exc, LocalValidationError):
        logger.info("%s wiki skipped: %s", action, exc)
    elif isinstance(exc, RemoteBusinessError):
        logger.info("%s wiki rejected for %s: %s", action, username, exc.error)
    else:
        logger.warning(
            "%s wiki for %s ended without a usable response: %s",
            action,
            username,
            exc,
        )
