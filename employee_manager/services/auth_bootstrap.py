"""Boot-time authentication gate.

Resolves whether the caller is signed in, racing the first auth notification
against a timer. Whichever arrives first decides; the timer is cancelled on
that first transition so it can never override a later signed-in state. An
unresolved session after the timeout is treated as signed out.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from enum import Enum

from employee_manager.core.config import settings
from employee_manager.models.auth import Identity
from employee_manager.services.auth_service import AuthService
from employee_manager.services.navigation import AUTH_ROUTE, MAIN_ROUTE, Navigator

logger = logging.getLogger(__name__)


class AuthState(str, Enum):
    UNRESOLVED = "unresolved"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


class AuthBootstrap:
    def __init__(
        self,
        auth_service: AuthService,
        navigator: Navigator,
        timeout: float | None = None,
    ) -> None:
        self.auth_service = auth_service
        self.navigator = navigator
        self.timeout = settings.AUTH_BOOTSTRAP_TIMEOUT_SECONDS if timeout is None else timeout
        self.state = AuthState.UNRESOLVED
        self.identity: Identity | None = None

        self._timer: asyncio.TimerHandle | None = None
        self._unsubscribe: Callable[[], None] | None = None
        self._resolved = asyncio.Event()

    @property
    def is_initialized(self) -> bool:
        return self.state is not AuthState.UNRESOLVED

    def start(self) -> None:
        if self._unsubscribe is not None:
            return
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.timeout, self._on_timeout)
        self._unsubscribe = self.auth_service.subscribe(self._on_auth_change)

    async def wait_resolved(self) -> AuthState:
        await self._resolved.wait()
        return self.state

    def close(self) -> None:
        self._cancel_timer()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_auth_change(self, identity: Identity | None) -> None:
        self.identity = identity
        self._transition(AuthState.AUTHENTICATED if identity else AuthState.UNAUTHENTICATED)

    def _on_timeout(self) -> None:
        self._timer = None
        if self.state is AuthState.UNRESOLVED:
            logger.warning("Auth state unresolved after %.1fs, treating as signed out", self.timeout)
            self._transition(AuthState.UNAUTHENTICATED)

    def _transition(self, new_state: AuthState) -> None:
        self._cancel_timer()
        if new_state is self.state:
            return

        logger.info("Auth state %s -> %s", self.state.value, new_state.value)
        self.state = new_state
        self._resolved.set()
        self.navigator.replace(MAIN_ROUTE if new_state is AuthState.AUTHENTICATED else AUTH_ROUTE)
