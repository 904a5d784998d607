"""Server-side pagination state for one logical list."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PageCursor:
    """Tracks the next page to request and whether a request is in flight.

    At most one load may be outstanding at a time: ``begin_load`` refuses a
    second caller until ``complete_load`` or ``abort_load`` releases it.
    """

    next_page: int = 0
    exhausted: bool = False
    loading: bool = False

    def reset(self) -> None:
        """Rewind to page 0; an in-flight load keeps its ``loading`` flag."""

        self.next_page = 0
        self.exhausted = False

    def begin_load(self) -> bool:
        """Claim the cursor; returns False when a load is already running."""

        if self.loading:
            return False
        self.loading = True
        return True

    def complete_load(self, is_last: bool) -> None:
        self.loading = False
        if is_last:
            self.exhausted = True
        else:
            self.next_page += 1

    def abort_load(self) -> None:
        """Release the cursor without advancing, leaving the page retryable."""

        self.loading = False

    def can_load_more(self) -> bool:
        return not self.loading and not self.exhausted
