"""Page tracking for the launcher's row of item buttons.

Child positions count the pagination controls as child ``0``; item
buttons start at position ``1``.
"""

from __future__ import annotations


class Pagination:
    """Tracks which page of item buttons is shown and which controls are usable."""

    def __init__(self, page_size: int) -> None:
        self.page_size = page_size
        self.offset = 1
        self.back_sensitive = False
        self.fwd_sensitive = False

    def forward(self, child_count: int) -> int:
        """Move one page forward and return the new offset.

        ``child_count`` includes the pagination controls.
        """
        if child_count < 1:
            raise ValueError("child_count must include the pagination controls")
        self.offset = min(child_count - 1, self.offset + self.page_size)
        if self.offset + self.page_size >= child_count:
            self.fwd_sensitive = False
        self.back_sensitive = True
        return self.offset

    def back(self) -> int:
        """Move one page back and return the new offset."""
        if self.page_size < self.offset:
            self.offset -= self.page_size
        else:
            self.offset = 1
        if self.offset == 1 or self.offset - self.page_size < 1:
            self.back_sensitive = False
        self.fwd_sensitive = True
        return self.offset

    def page_visibility(self, child_count: int) -> list[bool]:
        """Return whether each item button (positions ``1`` onward) is shown."""
        return [
            self.offset <= position < self.offset + self.page_size
            for position in range(1, child_count)
        ]