"""Admin session service.

The admin flag lives in one client's session mapping (Django's
`request.session` over HTTP) under the `admin_session` storage key, so a
login only unlocks that client. It gates admin writes; it is not user
management: any well-formed email with a long enough password is accepted.
"""

import logging
import re
from collections.abc import MutableMapping
from typing import Any

from django.core.exceptions import ValidationError
from django.core.validators import validate_email

from venue.domain.normalizers import Clock, as_text, iso_timestamp

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
ADMIN_PAGE = "./admin.html"

_RETURN_FILE = re.compile(r"^[a-z0-9-]+\.html$", re.IGNORECASE)


def sanitize_return_file(value: Any) -> str:
    """Keep only plain page names such as "admin.html"; anything else is ""."""
    text = as_text(value).strip()
    return text if _RETURN_FILE.match(text) else ""


def login_redirect(value: Any) -> str:
    """Page to open after login: the requested page when it is safe, else the admin page."""
    page = sanitize_return_file(value)
    return f"./{page}" if page else ADMIN_PAGE


class AdminSessionService:
    """Service for the admin flag of one client session."""

    def __init__(
        self, session: MutableMapping[str, Any], key: str, clock: Clock
    ) -> None:
        self._session = session
        self._key = key
        self._clock = clock

    def current(self) -> dict[str, Any] | None:
        value = self._session.get(self._key)
        return value if isinstance(value, dict) else None

    def is_logged_in(self) -> bool:
        current = self.current()
        return bool(current and current.get("ok"))

    def log_in(self, email: Any, password: Any) -> bool:
        address = as_text(email).strip()
        try:
            validate_email(address)
        except ValidationError:
            logger.warning("Rejected admin login with malformed email")
            return False
        if len(as_text(password)) < MIN_PASSWORD_LENGTH:
            logger.warning("Rejected admin login for %s: password too short", address)
            return False
        self._session[self._key] = {
            "ok": True,
            "email": address,
            "at": iso_timestamp(self._clock()),
        }
        logger.info("Admin session opened for %s", address)
        return True

    def log_out(self) -> None:
        self._session.pop(self._key, None)
        logger.info("Admin session closed")
