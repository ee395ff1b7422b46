"""
Session Manager

Owns the current user snapshot. The canonical copy lives in the store under
``StorageKeys.CURRENT_USER``; each manager keeps an in-memory mirror and
re-reads the record whenever the shared ``ChangeNotifier`` fires, so several
managers on one store stay consistent without sharing objects.

Lifecycle:
    ANONYMOUS -> AUTHENTICATING -> AUTHENTICATED
    AUTHENTICATED -> ANONYMOUS (logout)
    AUTHENTICATING -> persisted state (failed login, nothing written)

Concurrent logins follow latest-request-wins: a response that arrives for a
superseded attempt is discarded.
"""

from typing import Any, Mapping, Optional

import httpx
from pydantic import ValidationError

from storefront.api.envelope import api_root, error_message, pick
from storefront.api.http import ApiResponse, post_json
from storefront.config import Settings
from storefront.errors import (
    ERROR_LOGIN_FAILED,
    ERROR_LOGIN_NO_USER,
    ERROR_LOGIN_SUPERSEDED,
    ERROR_REGISTRATION_FAILED,
    ERROR_VERIFICATION_FAILED,
)
from storefront.logging import (
    get_logger,
    mask_email_for_logging,
    sanitize_id_for_logging,
    sanitize_string_for_logging,
)
from storefront.storage import JsonStore, StorageKeys
from .events import ChangeNotifier
from .models import LoginResult, SessionState, SessionUser

logger = get_logger(__name__)

# Statuses that mean "primary endpoint is not there", not "bad credentials"
FALLBACK_STATUSES = {0, 404}


def should_fall_back(response: ApiResponse) -> bool:
    """Whether a login response warrants trying the fallback endpoint."""
    return (
        response.error is not None
        or response.status in FALLBACK_STATUSES
        or response.status >= 500
    )


class SessionManager:
    """Authentication state for one consumer of the shared store."""

    def __init__(
        self,
        store: JsonStore,
        notifier: ChangeNotifier,
        settings: Settings,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.store = store
        self.notifier = notifier
        self.settings = settings
        self.client = client

        self._user: Optional[SessionUser] = None
        self._state = SessionState.ANONYMOUS
        self._login_seq = 0

        self.hydrate()
        self._unsubscribe = notifier.subscribe(self.hydrate)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def user(self) -> Optional[SessionUser]:
        return self._user

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_authenticated(self) -> bool:
        return self._state == SessionState.AUTHENTICATED

    @property
    def is_loading(self) -> bool:
        return self._state == SessionState.AUTHENTICATING

    @property
    def is_admin(self) -> bool:
        return self._user is not None and self._user.is_admin

    @property
    def token(self) -> Optional[str]:
        return self.store.read_text(StorageKeys.TOKEN)

    def _settle(self) -> None:
        self._state = SessionState.AUTHENTICATED if self._user else SessionState.ANONYMOUS

    def _load_persisted_user(self) -> Optional[SessionUser]:
        record = self.store.read_object(StorageKeys.CURRENT_USER)
        if record is None:
            return None
        try:
            return SessionUser.model_validate(record)
        except ValidationError as e:
            logger.warning(f"Persisted session user is invalid, treating as anonymous: {e.error_count()} errors")
            return None

    def hydrate(self) -> Optional[SessionUser]:
        """Re-read the persisted user. Never raises."""
        if not self.store.is_durable:
            # Nothing to resync from; the in-memory mirror is the only copy
            return self._user

        self._user = self._load_persisted_user()
        if self._state != SessionState.AUTHENTICATING:
            self._settle()
        return self._user

    def close(self) -> None:
        """Stop listening for change notifications."""
        self._unsubscribe()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_user(body: Any) -> Optional[SessionUser]:
        user_data = pick(body, "user")
        if not isinstance(user_data, dict):
            return None
        try:
            return SessionUser.model_validate(user_data)
        except ValidationError as e:
            logger.warning(f"Auth response carried an invalid user: {e.error_count()} errors")
            return None

    def _persist_auth(self, body: Any, require_user: bool = True) -> Optional[SessionUser]:
        """
        Store the user and tokens carried by an auth response body.

        With ``require_user`` nothing is written unless the body has a valid
        user.
        """
        user = self._parse_user(body)
        if user is None and require_user:
            return None

        access_token = pick(body, "accessToken") or pick(body, "token")
        if isinstance(access_token, str) and access_token:
            self.store.write_text(StorageKeys.TOKEN, access_token)
            self.store.write_text(StorageKeys.ACCESS_TOKEN, access_token)

        if user is None:
            return None

        self.store.write_object(StorageKeys.CURRENT_USER, user.to_record())
        self._user = user
        self._state = SessionState.AUTHENTICATED
        self.notifier.notify()
        return user

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def login(self, email: str, password: str) -> LoginResult:
        """
        Log in against the primary endpoint, falling back once.

        Returns:
            LoginResult with the user, or an error message. Failures leave
            persisted state untouched.
        """
        self._login_seq += 1
        attempt = self._login_seq
        self._state = SessionState.AUTHENTICATING
        timeout = self.settings.request_timeout
        payload = {"email": email, "password": password}

        logger.info(f"Login attempt for {mask_email_for_logging(email)}")

        try:
            response = await post_json(self.client, self.settings.login_url, payload, timeout=timeout)
            if should_fall_back(response):
                logger.info(
                    f"Primary login endpoint unavailable ({response.error or response.status}), trying fallback"
                )
                response = await post_json(self.client, self.settings.login_fallback_url, payload, timeout=timeout)

            if attempt != self._login_seq:
                logger.info("Discarding response for a superseded login attempt")
                return LoginResult(error=ERROR_LOGIN_SUPERSEDED)

            if not response.ok:
                message = response.error or error_message(
                    response.body, f"{ERROR_LOGIN_FAILED} ({response.status})"
                )
                logger.warning(
                    f"Login failed for {mask_email_for_logging(email)}: {sanitize_string_for_logging(message)}"
                )
                self._settle()
                return LoginResult(error=message)

            user = self._persist_auth(response.body)
            if user is None:
                self._settle()
                return LoginResult(error=ERROR_LOGIN_NO_USER)

            logger.info(f"Login successful for user {sanitize_id_for_logging(user.id)}")
            return LoginResult(user=user)
        finally:
            # A failed or aborted attempt must not leave the state machine waiting
            if attempt == self._login_seq and self._state == SessionState.AUTHENTICATING:
                self._settle()

    def logout(self) -> None:
        """Forget the current user and tokens, then notify listeners."""
        try:
            for key in StorageKeys.session_keys():
                self.store.remove(key)
        finally:
            self._user = None
            self._state = SessionState.ANONYMOUS
            self.notifier.notify()

    def update_user(self, changes: Optional[Mapping[str, Any]] = None, **fields: Any) -> Optional[SessionUser]:
        """
        Shallow-merge profile changes into the current user.

        Returns None, changing nothing, when nobody is logged in or the
        merged record is not a valid user.
        """
        if self._user is None:
            return None

        updates = dict(changes or {})
        updates.update(fields)
        try:
            updated = self._user.merged(updates)
        except ValidationError as e:
            logger.warning(f"Ignoring invalid profile update: {e.error_count()} errors")
            return None

        self.store.write_object(StorageKeys.CURRENT_USER, updated.to_record())
        self._user = updated
        self.notifier.notify()
        return updated

    async def register(self, name: str, email: str, password: str) -> LoginResult:
        """
        Create an account. A returned user is logged in immediately; when the
        backend requires OTP verification first, the result carries no user.
        """
        base = self.settings.api_base_url.rstrip("/")
        timeout = self.settings.request_timeout
        payload = {"name": name, "email": email, "password": password}

        response = await post_json(self.client, f"{api_root(base)}/api/v1/auth/register", payload, timeout=timeout)
        if not response.ok and (response.status == 404 or not response.is_json):
            response = await post_json(self.client, f"{base}/api/v1/auth/register", payload, timeout=timeout)

        if not response.ok:
            message = response.error or error_message(
                response.body, f"{ERROR_REGISTRATION_FAILED} ({response.status})"
            )
            logger.warning(f"Registration failed for {mask_email_for_logging(email)}: {message}")
            return LoginResult(error=message)

        user = self._persist_auth(response.body, require_user=False)
        logger.info(f"Registered {mask_email_for_logging(email)} (logged in: {user is not None})")
        return LoginResult(user=user)

    async def verify_otp(self, email: str, otp: str) -> Optional[str]:
        """Verify an emailed OTP. Returns an error message, or None on success."""
        url = f"{api_root(self.settings.api_base_url)}/api/v1/auth/verify-otp"
        response = await post_json(
            self.client, url, {"email": email, "otp": otp}, timeout=self.settings.request_timeout
        )
        if response.ok:
            return None
        return response.error or error_message(
            response.body, f"{ERROR_VERIFICATION_FAILED} ({response.status})"
        )
