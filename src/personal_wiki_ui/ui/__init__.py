"""
UI Package

Port, clipboard and timer abstractions the controller drives instead of
touching page elements directly.
"""

from .port import UIPort, InMemoryUIPort
from .clipboard import Clipboard, InMemoryClipboard
from .scheduler import Scheduler, AsyncioScheduler, ManualScheduler

__all__ = [
    "UIPort",
    "InMemoryUIPort",
    "Clipboard",
    "InMemoryClipboard",
    "Scheduler",
    "AsyncioScheduler",
    "ManualScheduler",
]
