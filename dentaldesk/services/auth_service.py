"""
Login, logout and patient self-registration.

Credentials are compared in plaintext and the session is a blob in the
same storage backend as the collections.
"""

import logging
from typing import Optional

from pydantic import ValidationError

from ..core.exceptions import (
    AuthenticationError,
    DuplicateEntityError,
    RegistrationError,
    StorageWriteError,
)
from ..schemas.auth import AuthSession, RegistrationRequest
from ..schemas.records import PatientCreate, User
from .data_store import DataStore
from .storage_service import StorageKeys

logger = logging.getLogger(__name__)


def registration_error_message(error: ValidationError) -> str:
    """First human-readable message from a registration ValidationError."""
    message = error.errors()[0]["msg"]
    return message.removeprefix("Value error, ")


class AuthService:
    """Session handling on top of the domain store."""

    def __init__(self, store: DataStore):
        self.store = store

    def login(self, email: str, password: str) -> User:
        """
        Log in with an email and password.

        Raises:
            AuthenticationError: If no user matches both (email is case-insensitive)
        """
        user = self.store.get_user_by_email(email)
        if user is None or user.password != password:
            raise AuthenticationError("Invalid email or password")

        self._save_session(user)
        logger.info(f"User {user.id} logged in")
        return user

    def register(self, request: RegistrationRequest) -> User:
        """
        Create a Patient account with its patient record and log it in.

        Raises:
            RegistrationError: If the email is already registered
        """
        patient_data = PatientCreate(
            name=request.name,
            email=request.email,
            dob=request.date_of_birth,
            contact=request.phone,
            address=request.address,
            emergency_contact=request.emergency_contact,
            health_info=request.health_info,
        )
        try:
            user, _ = self.store.create_patient_account(
                request.email, request.password, patient_data
            )
        except DuplicateEntityError:
            raise RegistrationError("An account with this email already exists")

        self._save_session(user)
        return user

    def register_from_form(self, form: dict) -> User:
        """Validate a raw registration form, then register."""
        try:
            request = RegistrationRequest.model_validate(form)
        except ValidationError as e:
            raise RegistrationError(registration_error_message(e))
        return self.register(request)

    def logout(self) -> None:
        self.store.storage.remove(StorageKeys.AUTH)

    def current_user(self) -> Optional[User]:
        """User of the saved session, if any and still valid."""
        blob = self.store.storage.get(StorageKeys.AUTH)
        if not blob:
            return None
        try:
            session = AuthSession.model_validate_json(blob)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable session: {e}")
            self.logout()
            return None
        return self.store.get_user_by_id(session.user.id)

    def _save_session(self, user: User) -> None:
        session = AuthSession(user=user)
        try:
            self.store.storage.set(StorageKeys.AUTH, session.model_dump_json(by_alias=True))
        except StorageWriteError as e:
            logger.warning(f"Session for {user.id} not persisted: {e}")
