from __future__ import annotations

from typing import Protocol

MAIN_ROUTE = "/main"
EMPLOYEES_ROUTE = "/main/employees"
AUTH_ROUTE = "/auth"


class Navigator(Protocol):
    def replace(self, route: str) -> None:
        """Navigate to ``route``, discarding the current history entry."""
        ...

    def push(self, route: str) -> None: ...
