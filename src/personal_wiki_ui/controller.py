"""
Wiki Action Controller

This module maps a click on one of the three action controls to exactly one
request against the wikis resource, and maps the outcome back onto the
control's label, its enabled flag and the shared result display.

State machine (identical for create, update and delete)
-------------------------------------------------------
RESTING --click--> IN_FLIGHT --empty field------------> FAILED   (local)
                             --success: true----------> SUCCEEDED (label reverts later)
                             --success: false---------> FAILED   (remote)
                             --transport/shape fault--> stays IN_FLIGHT

The result display (``wikiLink`` + ``linkContainer``) is shared by all three
actions: whichever action writes last wins.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Set

import httpx

from .config import settings
from .api.models import (
    ACTION_SPECS,
    ActionKind,
    ActionOutcome,
    ActionRequest,
    ActionSpec,
    ControlState,
    CreateOrUpdateWikiRequest,
    DeleteWikiRequest,
    MalformedResponse,
    ParseResult,
)
from .core.errors import (
    LocalValidationError,
    RemoteBusinessError,
    TransportOrShapeError,
    WikiActionError,
    log_action_error,
)
from .ui.clipboard import Clipboard, InMemoryClipboard
from .ui.port import (
    COPY_BUTTON,
    PASSWORD_FIELD,
    RESULT_CONTAINER,
    RESULT_FIELD,
    USERNAME_FIELD,
    WIKI_FIELD,
    UIPort,
)
from .ui.scheduler import AsyncioScheduler, Scheduler
from .wiki.api_client import WikiResourceClient

logger = logging.getLogger("wiki.controller")

COPIED_LABEL = "Copied!"

_SPECS_BY_CONTROL: Dict[str, ActionSpec] = {
    spec.control_id: spec for spec in ACTION_SPECS.values()
}


class WikiActionController:
    """
    Orchestrates the create, update and delete flows.

    Parameters
    ----------
    port : UIPort
        Access to input fields, control labels and the result display.

    client : WikiResourceClient, optional
        HTTP client for the wikis resource. Defaults to one built from
        settings.

    scheduler : Scheduler, optional
        Runs the label revert timers. Defaults to the asyncio event loop.

    clipboard : Clipboard, optional
        Target of the copy affordance.

    revert_delay : float, optional
        Seconds before a success label or "Copied!" reverts.

    terminal_on_transport_error : bool, optional
        When True, a transport or shape failure reverts the control and shows
        a generic error instead of leaving it on its in-flight label.
    """

    def __init__(
        self,
        port: UIPort,
        client: Optional[WikiResourceClient] = None,
        scheduler: Optional[Scheduler] = None,
        clipboard: Optional[Clipboard] = None,
        revert_delay: Optional[float] = None,
        terminal_on_transport_error: Optional[bool] = None,
    ) -> None:
        self._port = port
        self._client = client or WikiResourceClient()
        self._scheduler = scheduler or AsyncioScheduler()
        self._clipboard = clipboard or InMemoryClipboard()
        self._revert_delay = (
            revert_delay if revert_delay is not None else settings.label_revert_delay
        )
        self._terminal_on_transport_error = (
            terminal_on_transport_error
            if terminal_on_transport_error is not None
            else settings.terminal_on_transport_error
        )
        self._states: Dict[str, ControlState] = {
            control_id: ControlState.RESTING for control_id in _SPECS_BY_CONTROL
        }
        self._pending: Set[str] = set()
        self._copy_label_before: Optional[str] = None

    # ------------------------------------------------------------------
    # Public actions
    # ------------------------------------------------------------------

    async def create_wiki(self) -> ActionOutcome:
        return await self._run(ACTION_SPECS[ActionKind.CREATE])

    async def update_wiki(self) -> ActionOutcome:
        return await self._run(ACTION_SPECS[ActionKind.UPDATE])

    async def delete_wiki(self) -> ActionOutcome:
        return await self._run(ACTION_SPECS[ActionKind.DELETE])

    async def click(self, control_id: str) -> ActionOutcome:
        """Dispatch a click by element id (``createWiki`` etc.)."""
        spec = _SPECS_BY_CONTROL.get(control_id)
        if spec is None:
            raise KeyError(f"Unknown action control: {control_id}")
        return await self._run(spec)

    def state_of(self, control_id: str) -> ControlState:
        return self._states[control_id]

    def copy_link(self) -> None:
        """
        Copy the displayed result to the clipboard and flash "Copied!".

        A clipboard failure is logged only; the label flips regardless.
        With the default asyncio scheduler the revert needs an event loop
        (see `AsyncioScheduler`).
        """
        text = self._port.get_field(RESULT_FIELD)
        try:
            self._clipboard.copy(text)
        except Exception:
            logger.warning("Clipboard copy failed", exc_info=True)

        if self._copy_label_before is None:
            self._copy_label_before = self._port.get_label(COPY_BUTTON)
        self._port.set_label(COPY_BUTTON, COPIED_LABEL)
        self._scheduler.schedule(COPY_BUTTON, self._revert_delay, self._revert_copy_label)

    # ------------------------------------------------------------------
    # Flow
    # ------------------------------------------------------------------

    async def _run(self, spec: ActionSpec) -> ActionOutcome:
        control = spec.control_id
        if control in self._pending:
            logger.debug("Ignoring click on %s while its request is pending", control)
            return ActionOutcome(spec.kind, self._states[control], requested=False)

        self._pending.add(control)
        try:
            return await self._perform(spec)
        finally:
            self._pending.discard(control)

    async def _perform(self, spec: ActionSpec) -> ActionOutcome:
        self._enter_in_flight(spec)
        req = self._read_request()
        requested = False

        try:
            missing = req.missing_fields(spec.requires_content)
            if missing:
                raise LocalValidationError(missing)

            requested = True
            result = await self._dispatch(spec, req)
            if isinstance(result, MalformedResponse):
                raise TransportOrShapeError(result.reason, result.payload)

            response = result.response
            if not response.success:
                raise RemoteBusinessError(response.error)

        except (LocalValidationError, RemoteBusinessError) as exc:
            log_action_error(spec.kind.value, req.identity, exc)
            self._enter_failed(spec, exc)
            return ActionOutcome(spec.kind, ControlState.FAILED, requested, exc)

        except TransportOrShapeError as exc:
            log_action_error(spec.kind.value, req.identity, exc)
            return self._handle_transport_failure(spec, exc)

        except Exception as exc:
            logger.exception("Unexpected failure during %s wiki", spec.kind.value)
            return self._handle_transport_failure(
                spec, TransportOrShapeError(f"unexpected error: {exc!r}")
            )

        logger.info("%s wiki succeeded for %s", spec.kind.value, req.identity)
        self._enter_succeeded(spec, req)
        return ActionOutcome(spec.kind, ControlState.SUCCEEDED, requested)

    async def _dispatch(self, spec: ActionSpec, req: ActionRequest) -> ParseResult:
        try:
            if spec.kind is ActionKind.DELETE:
                return await self._client.delete_wiki(
                    DeleteWikiRequest(username=req.identity, password=req.credential)
                )

            body = CreateOrUpdateWikiRequest(
                username=req.identity,
                content=req.content or "",
                password=req.credential,
            )
            if spec.kind is ActionKind.CREATE:
                return await self._client.create_wiki(body)
            return await self._client.update_wiki(body)

        except httpx.HTTPStatusError as exc:
            raise TransportOrShapeError(
                f"HTTP {exc.response.status_code} from {spec.method} {exc.request.url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportOrShapeError(f"{type(exc).__name__}: {exc}") from exc
        except ValueError as exc:
            raise TransportOrShapeError(f"undecodable response body: {exc}") from exc

    def _read_request(self) -> ActionRequest:
        return ActionRequest(
            identity=self._port.get_field(USERNAME_FIELD),
            credential=self._port.get_field(PASSWORD_FIELD),
            content=self._port.get_field(WIKI_FIELD),
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _enter_in_flight(self, spec: ActionSpec) -> None:
        control = spec.control_id
        # A revert still pending from an earlier success must not overwrite
        # the in-flight label.
        self._scheduler.cancel(control)
        self._states[control] = ControlState.IN_FLIGHT
        self._port.set_label(control, spec.in_flight_label)
        self._port.set_enabled(control, False)

    def _enter_succeeded(self, spec: ActionSpec, req: ActionRequest) -> None:
        control = spec.control_id
        self._states[control] = ControlState.SUCCEEDED
        self._port.set_label(control, spec.success_label)
        self._scheduler.schedule(
            control, self._revert_delay, lambda: self._revert_label(spec)
        )
        self._port.set_enabled(control, True)

        if spec.shows_link:
            self._port.set_text(RESULT_FIELD, self._client.wiki_page_url(req.identity))
            self._port.set_visible(RESULT_CONTAINER, True)

    def _enter_failed(self, spec: ActionSpec, exc: WikiActionError) -> None:
        control = spec.control_id
        self._states[control] = ControlState.FAILED
        self._port.set_label(control, spec.resting_label)
        self._port.set_enabled(control, True)
        self._show_error(exc)

    def _handle_transport_failure(
        self, spec: ActionSpec, exc: TransportOrShapeError
    ) -> ActionOutcome:
        if not self._terminal_on_transport_error:
            return ActionOutcome(spec.kind, ControlState.IN_FLIGHT, True, exc)

        self._enter_failed(spec, exc)
        return ActionOutcome(spec.kind, ControlState.FAILED, True, exc)

    def _show_error(self, exc: WikiActionError) -> None:
        self._port.set_text(RESULT_FIELD, exc.display_text())
        self._port.set_visible(RESULT_CONTAINER, True)
        self._port.set_visible(COPY_BUTTON, False)

    def _revert_label(self, spec: ActionSpec) -> None:
        # Cosmetic only: the control state keeps SUCCEEDED
        self._port.set_label(spec.control_id, spec.resting_label)

    def _revert_copy_label(self) -> None:
        label = self._copy_label_before
        self._copy_label_before = None
        if label is not None:
            self._port.set_label(COPY_BUTTON, label)
