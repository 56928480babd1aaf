"""Boundary Protocols - contracts between the session core and the UI shell.

Invariants:
    - Core and services never import UI code; the shell injects these
    - navigate() is a signal, not a guarantee: the caller stops its own work
      after requesting navigation

Design Decisions:
    - Protocol over ABC: structural subtyping, any object with navigate() fits
    - Notifier is a plain callable: a blocking acknowledgement (input(), a modal)
      and a log line are both one-argument functions
"""

from collections.abc import Callable
from typing import Protocol

from meridian.core.domain_types import Page


class Navigator(Protocol):
    """Contract for page navigation - implemented by the UI shell."""
    def navigate(self, page: Page) -> None: ...


Notifier = Callable[[str], None]
