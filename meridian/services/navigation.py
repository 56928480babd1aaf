"""Default Navigator - records navigation requests for headless hosts.

Invariants:
    - history keeps every requested page in order; current_page is the last one
    - on_navigate (when given) runs after the page is recorded
"""

import logging
from collections.abc import Callable

from meridian.core.domain_types import Page

logger = logging.getLogger(__name__)


class PageNavigator:
    """Navigator used when no UI shell is attached (CLI, tests, scripts)."""

    def __init__(
        self,
        start: Page | None = None,
        on_navigate: Callable[[Page], None] | None = None,
    ):
        self.history: list[Page] = []
        self.current_page = start
        self._on_navigate = on_navigate

    def navigate(self, page: Page) -> None:
        logger.info(f"Navigating to {page.value}")
        self.history.append(page)
        self.current_page = page
        if self._on_navigate is not None:
            self._on_navigate(page)
