"""
Controller Entry Point

This module wires a `WikiActionController` to its collaborators and provides
a test-friendly factory.

Design Goals
------------
- One place that decides the default client, scheduler and clipboard
- Every collaborator overridable for tests and alternative front ends
- Initial control labels written before the first click
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from .config import Settings, settings as default_settings
from .api.models import ACTION_SPECS
from .controller import WikiActionController
from .ui.clipboard import Clipboard
from .ui.port import UIPort
from .ui.scheduler import AsyncioScheduler, Scheduler
from .wiki.api_client import WikiResourceClient


logger = logging.getLogger("wiki.app")


# ---------------------------------------------------------------------
# Controller Factory (Test-Friendly)
# ---------------------------------------------------------------------

def create_controller(
    port: UIPort,
    *,
    config: Optional[Settings] = None,
    scheduler: Optional[Scheduler] = None,
    clipboard: Optional[Clipboard] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> WikiActionController:
    """
    Create a controller bound to a UI port.

    Parameters
    ----------
    port : UIPort
        The page (or fake) the controller reads from and writes to.

    config : Settings, optional
        Settings instance; the module-level settings are used when omitted.

    scheduler : Scheduler, optional
        Timer backend for label reverts. Defaults to the running event loop.

    clipboard : Clipboard, optional
        Target of the copy affordance.

    transport : httpx.AsyncBaseTransport, optional
        Transport override for the HTTP client (e.g. ASGITransport in tests).

    Returns
    -------
    WikiActionController
        Controller with every action control showing its resting label.
    """
    cfg = config or default_settings

    client = WikiResourceClient(
        base_url=str(cfg.endpoint_base_url),
        wikis_path=cfg.wikis_path,
        public_wiki_base_url=cfg.public_wiki_base_url,
        timeout=cfg.request_timeout,
        transport=transport,
    )

    controller = WikiActionController(
        port,
        client=client,
        scheduler=scheduler or AsyncioScheduler(),
        clipboard=clipboard,
        revert_delay=cfg.label_revert_delay,
        terminal_on_transport_error=cfg.terminal_on_transport_error,
    )

    for spec in ACTION_SPECS.values():
        port.set_label(spec.control_id, spec.resting_label)
        port.set_enabled(spec.control_id, True)

    logger.info("Wiki controller ready against %s", client.wikis_url)
    return controller
