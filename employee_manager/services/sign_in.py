from __future__ import annotations

import logging

from employee_manager.core.exceptions import AuthError, ValidationError
from employee_manager.models.auth import Identity
from employee_manager.services.auth_service import AuthService
from employee_manager.services.navigation import MAIN_ROUTE, Navigator
from employee_manager.services.validation import validate_sign_in

logger = logging.getLogger(__name__)


class SignInController:
    """Sign-in form flow: validate, call the auth service, enter the main area."""

    def __init__(self, auth_service: AuthService, navigator: Navigator) -> None:
        self.auth_service = auth_service
        self.navigator = navigator
        self.loading = False

    async def sign_in(self, email: str, password: str) -> Identity:
        errors = validate_sign_in(email, password)
        if errors:
            raise ValidationError(errors)

        self.loading = True
        try:
            logger.info("Attempting to sign in with: %s", email)
            identity = await self.auth_service.sign_in(email.strip(), password)
        except AuthError:
            logger.exception("Sign in error")
            raise
        finally:
            self.loading = False

        self.navigator.replace(MAIN_ROUTE)
        return identity
