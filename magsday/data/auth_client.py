from __future__ import annotations

import hashlib
import logging
import threading
from dataclasses import dataclass
from typing import Dict, Optional
from uuid import uuid4

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from magsday.constants import MIN_PASSWORD_LENGTH

logger = logging.getLogger(__name__)

IDENTITY_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1"

ERROR_MESSAGES = {
    "EMAIL_EXISTS": "An account with this email already exists.",
    "EMAIL_NOT_FOUND": "Invalid email or password.",
    "INVALID_PASSWORD": "Invalid email or password.",
    "INVALID_LOGIN_CREDENTIALS": "Invalid email or password.",
    "INVALID_EMAIL": "The email address is badly formatted.",
    "MISSING_PASSWORD": "Password is required.",
    "WEAK_PASSWORD": f"Password should be at least {MIN_PASSWORD_LENGTH} characters.",
    "USER_DISABLED": "This account has been disabled.",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Too many attempts. Try again later.",
    "SESSION_UNAVAILABLE": "Your data could not be loaded. Please sign in again.",
}


class AuthError(Exception):
    def __init__(self, code: str, message: Optional[str] = None):
        self.code = code
        super().__init__(message or ERROR_MESSAGES.get(code) or code.replace("_", " ").capitalize())


@dataclass(frozen=True)
class Identity:
    uid: str
    email: str
    id_token: Optional[str] = None


def _error_code(raw_message: str) -> str:
    # Identity Toolkit appends detail after " : ", e.g. "WEAK_PASSWORD : Password should be..."
    return str(raw_message or "UNKNOWN").split(" : ", 1)[0].strip() or "UNKNOWN"


def _build_session():
    session = requests.Session()
    retry = Retry(
        total=2,
        backoff_factor=0.5,
        status_forcelist=(502, 503, 504),
        allowed_methods=("POST",),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry, pool_connections=4, pool_maxsize=4)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class FirebaseAuthClient:
    def __init__(self, api_key: str, session: requests.Session | None = None, timeout: int = 10):
        if not api_key:
            raise ValueError("Firebase config is missing apiKey")
        self._api_key = api_key
        self._session = session or _build_session()
        self._timeout = timeout

    def _post(self, action: str, payload: dict) -> dict:
        url = f"{IDENTITY_TOOLKIT_URL}/accounts:{action}"
        try:
            response = self._session.post(
                url,
                params={"key": self._api_key},
                json=payload,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise AuthError("NETWORK_ERROR", f"Could not reach the authentication service: {exc}") from exc
        if not response.ok:
            try:
                raw_message = response.json().get("error", {}).get("message", "")
            except ValueError:
                raw_message = ""
            code = _error_code(raw_message) if raw_message else f"HTTP_{response.status_code}"
            raise AuthError(code)
        return response.json()

    def _identity(self, body: dict) -> Identity:
        return Identity(uid=body["localId"], email=body.get("email", ""), id_token=body.get("idToken"))

    def sign_up(self, email: str, password: str) -> Identity:
        body = self._post("signUp", {"email": email, "password": password, "returnSecureToken": True})
        return self._identity(body)

    def sign_in(self, email: str, password: str) -> Identity:
        body = self._post(
            "signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        return self._identity(body)

    def sign_out(self, identity: Identity) -> None:
        # ID tokens are not revocable from the client; dropping them is the sign-out.
        return None


class LocalAuthClient:
    """Account registry kept in process memory, for the local development backend."""

    def __init__(self) -> None:
        self._accounts: Dict[str, Dict[str, str]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _hash(email: str, password: str) -> str:
        return hashlib.sha256(f"{email}:{password}".encode("utf-8")).hexdigest()

    @staticmethod
    def _clean_email(email: str) -> str:
        clean = str(email or "").strip().lower()
        if "@" not in clean or clean.startswith("@") or clean.endswith("@"):
            raise AuthError("INVALID_EMAIL")
        return clean

    def sign_up(self, email: str, password: str) -> Identity:
        clean = self._clean_email(email)
        if not password:
            raise AuthError("MISSING_PASSWORD")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AuthError("WEAK_PASSWORD")
        with self._lock:
            if clean in self._accounts:
                raise AuthError("EMAIL_EXISTS")
            uid = uuid4().hex[:28]
            self._accounts[clean] = {"uid": uid, "password_hash": self._hash(clean, password)}
        logger.info("Local account created for %s.", clean)
        return Identity(uid=uid, email=clean)

    def sign_in(self, email: str, password: str) -> Identity:
        clean = self._clean_email(email)
        with self._lock:
            account = self._accounts.get(clean)
        if account is None or account["password_hash"] != self._hash(clean, password or ""):
            raise AuthError("INVALID_LOGIN_CREDENTIALS")
        return Identity(uid=account["uid"], email=clean)

    def sign_out(self, identity: Identity) -> None:
        return None
