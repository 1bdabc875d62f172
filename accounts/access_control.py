# accounts/access_control.py
import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import PermissionDenied, ValidationError
from django.http import Http404

logger = logging.getLogger(__name__)


class AuthorizationError(PermissionDenied):
    """No resolvable caller identity for the current operation."""


class NotFoundOrAccessDenied(Http404):
    """Record is missing or not visible to the caller; the two cases are not distinguished."""


def resolve_caller(user):
    """
    Resolve the acting user to a known, active user record.
    Raises AuthorizationError for anonymous, inactive or unknown users.
    """
    if user is None or not getattr(user, 'is_authenticated', False):
        raise AuthorizationError("Unauthorized")

    User = get_user_model()
    caller = User.objects.filter(pk=user.pk, is_active=True).first()
    if caller is None:
        logger.warning("Caller %s could not be resolved to an active user", user.pk)
        raise AuthorizationError("User not found")
    return caller


def get_owned_or_404(queryset, message="Not found or access denied", **lookup):
    """
    Fetch a single row from an owner-scoped queryset or raise NotFoundOrAccessDenied.
    Lookup values the key field cannot accept (e.g. 'abc' for an integer id) count as missing.
    """
    try:
        obj = queryset.filter(**lookup).first()
    except (TypeError, ValueError, ValidationError):
        obj = None
    if obj is None:
        raise NotFoundOrAccessDenied(message)
    return obj
