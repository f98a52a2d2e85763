"""Fake femtologging logger that records calls for assertions."""

from __future__ import annotations


class FakeLogger:
    """Collects log calls as ``(level, message, exc_info, stack_info)`` tuples."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, object | None, bool]] = []

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str:
        self.calls.append((level, message, exc_info, stack_info))
        return message

    def messages(self, level: str) -> list[str]:
        """Return the messages logged at ``level``."""
        return [message for lvl, message, _, _ in self.calls if lvl == level]
