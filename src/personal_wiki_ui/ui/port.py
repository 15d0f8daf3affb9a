"""
UI Port

The controller never touches page elements directly. It reads input fields
and writes labels, text and visibility through a `UIPort`, so the same logic
can drive a browser bridge, a desktop toolkit, or the in-memory fake below.

Element ids
-----------
- Input fields: ``username``, ``password``, ``wiki``
- Action controls: ``createWiki``, ``updateWiki``, ``deleteWiki``
- Result field: ``wikiLink``
- Visibility regions: ``linkContainer``, ``copyButton``
"""

from __future__ import annotations

from threading import RLock
from typing import Dict, List, Optional, Protocol, Tuple, runtime_checkable


USERNAME_FIELD = "username"
PASSWORD_FIELD = "password"
WIKI_FIELD = "wiki"

RESULT_FIELD = "wikiLink"
RESULT_CONTAINER = "linkContainer"
COPY_BUTTON = "copyButton"


@runtime_checkable
class UIPort(Protocol):
    def get_field(self, name: str) -> str: ...

    def set_label(self, control_id: str, text: str) -> None: ...

    def get_label(self, control_id: str) -> str: ...

    def set_text(self, field_id: str, text: str) -> None: ...

    def set_visible(self, region_id: str, visible: bool) -> None: ...

    def set_enabled(self, control_id: str, enabled: bool) -> None: ...


class InMemoryUIPort:
    """
    Dictionary-backed UI port.

    Holds field values, labels, visibility and enabled flags, and records
    every mutating call in order so tests can assert on transitions rather
    than only on final state.

    Regions start hidden and controls start enabled, matching a freshly
    loaded page.

    Access is guarded by a re-entrant lock because a hosting toolkit may
    read or type into the fields from its own UI thread while the controller
    runs on an asyncio loop thread.
    """

    def __init__(
        self,
        fields: Optional[Dict[str, str]] = None,
        labels: Optional[Dict[str, str]] = None,
    ) -> None:
        self.fields: Dict[str, str] = dict(fields or {})
        self.labels: Dict[str, str] = dict(labels or {})
        self.visible: Dict[str, bool] = {}
        self.enabled: Dict[str, bool] = {}
        self.calls: List[Tuple[str, str, object]] = []
        self._lock = RLock()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_field(self, name: str) -> str:
        with self._lock:
            return self.fields.get(name, "")

    def get_label(self, control_id: str) -> str:
        with self._lock:
            return self.labels.get(control_id, "")

    def is_visible(self, region_id: str) -> bool:
        with self._lock:
            return self.visible.get(region_id, False)

    def is_enabled(self, control_id: str) -> bool:
        with self._lock:
            return self.enabled.get(control_id, True)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def set_field(self, name: str, value: str) -> None:
        """Simulate the user typing into an input field."""
        with self._lock:
            self.fields[name] = value

    def set_label(self, control_id: str, text: str) -> None:
        with self._lock:
            self.labels[control_id] = text
            self.calls.append(("label", control_id, text))

    def set_text(self, field_id: str, text: str) -> None:
        with self._lock:
            self.fields[field_id] = text
            self.calls.append(("text", field_id, text))

    def set_visible(self, region_id: str, visible: bool) -> None:
        with self._lock:
            self.visible[region_id] = visible
            self.calls.append(("visible", region_id, visible))

    def set_enabled(self, control_id: str, enabled: bool) -> None:
        with self._lock:
            self.enabled[control_id] = enabled
            self.calls.append(("enabled", control_id, enabled))

    def label_history(self, control_id: str) -> List[str]:
        """Every label written to a control, oldest first."""
        with self._lock:
            return [
                value for kind, target, value in self.calls
                if kind == "label" and target == control_id
            ]

    def touched(self, element_id: str) -> bool:
        with self._lock:
            return any(target == element_id for _, target, _ in self.calls)
