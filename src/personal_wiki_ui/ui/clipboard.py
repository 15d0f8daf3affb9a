from typing import List, Protocol


class Clipboard(Protocol):
    def copy(self, text: str) -> None: ...


class InMemoryClipboard:
    """Keeps every copied value; the last one is the clipboard content."""

    def __init__(self) -> None:
        self.history: List[str] = []

    def copy(self, text: str) -> None:
        self.history.append(text)

    @property
    def content(self) -> str:
        return self.history[-1] if self.history else ""
