"""Access rules based on the admin flag in the client's Django session.

Admin writes ride on the session cookie, so unsafe methods must also pass
Django's CSRF check, the same check DRF's SessionAuthentication applies.
"""

import logging

from rest_framework.authentication import SessionAuthentication
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import SAFE_METHODS, BasePermission

logger = logging.getLogger(__name__)

_csrf = SessionAuthentication()


def has_admin_session(request, view) -> bool:
    if not view.admin_session.is_logged_in():
        return False
    if request.method in SAFE_METHODS:
        return True
    try:
        _csrf.enforce_csrf(request)
    except PermissionDenied:
        logger.warning("Admin %s %s refused: CSRF check failed", request.method, request.path)
        return False
    return True


class ReadOnlyOrAdmin(BasePermission):
    """Anyone may read; writes need an admin session."""

    def has_permission(self, request, view) -> bool:
        return request.method in SAFE_METHODS or has_admin_session(request, view)


class AdminOnly(BasePermission):
    def has_permission(self, request, view) -> bool:
        return has_admin_session(request, view)


class SubmitOrAdmin(BasePermission):
    """Visitors may submit (POST); everything else needs an admin session."""

    def has_permission(self, request, view) -> bool:
        return request.method == "POST" or has_admin_session(request, view)
