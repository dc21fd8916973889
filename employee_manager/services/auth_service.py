"""Firebase Authentication client (Identity Toolkit REST API)."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

import aiohttp

from employee_manager.core.config import Settings
from employee_manager.core.exceptions import AuthError
from employee_manager.models.auth import Identity

logger = logging.getLogger(__name__)

AuthListener = Callable[[Identity | None], None]

_SIGN_IN_URL = "https://identitytoolkit.googleapis.com/v1/accounts:signInWithPassword"

_ERROR_MESSAGES: dict[str, str] = {
    "EMAIL_NOT_FOUND": "There is no user record corresponding to this email.",
    "INVALID_PASSWORD": "The password is invalid.",
    "INVALID_LOGIN_CREDENTIALS": "Invalid email or password.",
    "INVALID_EMAIL": "The email address is badly formatted.",
    "USER_DISABLED": "This account has been disabled.",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Too many failed attempts. Please try again later.",
}


class AuthService(Protocol):
    def subscribe(self, on_change: AuthListener) -> Callable[[], None]: ...

    async def sign_in(self, email: str, password: str) -> Identity: ...

    async def sign_out(self) -> None: ...


def _error_message(code: str) -> str:
    key = code.split(" : ", 1)[0].strip()
    return _ERROR_MESSAGES.get(key, "An error occurred during sign in")


class FirebaseAuthService:
    def __init__(self) -> None:
        self.initialized = False
        self.api_key = ""
        self.current: Identity | None = None
        self._listeners: list[AuthListener] = []

    async def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return

        if not settings.FIREBASE_API_KEY:
            logger.warning("Firebase API key missing — FirebaseAuthService not initialized")
            return

        self.api_key = settings.FIREBASE_API_KEY
        self.initialized = True

    async def close(self) -> None:
        self.initialized = False
        self.api_key = ""
        self._listeners.clear()

    def subscribe(self, on_change: AuthListener) -> Callable[[], None]:
        """Register ``on_change``; it first receives the current session on the next loop turn."""
        self._listeners.append(on_change)
        asyncio.get_running_loop().call_soon(self._deliver, on_change)

        def unsubscribe() -> None:
            if on_change in self._listeners:
                self._listeners.remove(on_change)

        return unsubscribe

    def _deliver(self, listener: AuthListener) -> None:
        if listener in self._listeners:
            listener(self.current)

    def _notify(self) -> None:
        logger.info("Auth state changed: %s", "User logged in" if self.current else "User logged out")
        for listener in list(self._listeners):
            listener(self.current)

    async def sign_in(self, email: str, password: str) -> Identity:
        if not self.initialized:
            raise AuthError("Authentication service not configured")

        payload = {"email": email, "password": password, "returnSecureToken": True}
        timeout = aiohttp.ClientTimeout(total=15)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(_SIGN_IN_URL, params={"key": self.api_key}, json=payload) as response:
                    data = await response.json()
                    if response.status != 200:
                        code = data.get("error", {}).get("message", "")
                        logger.warning("Sign in failed for %s: %s", email, code)
                        raise AuthError(_error_message(code), {"code": code, "status": response.status})
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("Sign in request failed: %s", e)
            raise AuthError("Network error. Please check your connection and try again.") from e
        except ValueError as e:
            logger.error("Unreadable sign in response: %s", e)
            raise AuthError("Unexpected response from the authentication service.") from e

        self.current = Identity(
            uid=data["localId"],
            email=data.get("email"),
            id_token=data.get("idToken"),
            refresh_token=data.get("refreshToken"),
        )
        self._notify()
        return self.current

    async def sign_out(self) -> None:
        self.current = None
        self._notify()


auth_service = FirebaseAuthService()
