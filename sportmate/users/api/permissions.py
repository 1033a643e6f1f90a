"""Permission classes shared by the SportMate API."""

from collections.abc import Iterable

from rest_framework.permissions import SAFE_METHODS
from rest_framework.permissions import BasePermission

ROLE_ADMIN = "Admin"


def _user_in_groups(user, names: Iterable[str]) -> bool:
    groups = getattr(user, "groups", None)
    names_list = list(names)
    if not groups or not names_list:
        return False
    return groups.filter(name__in=names_list).exists()


def is_platform_admin(user) -> bool:
    if not (user and getattr(user, "is_authenticated", False)):
        return False
    if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
        return True
    return _user_in_groups(user, [ROLE_ADMIN])


class IsPlatformAdmin(BasePermission):
    """Allow access only to staff or members of the Admin group."""

    message = "Admin access required"

    def has_permission(self, request, view):
        return is_platform_admin(getattr(request, "user", None))


class IsEventHostOrReadOnly(BasePermission):
    """Writes on an event are reserved to its host."""

    message = "Not authorized to update this event"

    def has_object_permission(self, request, view, obj):
        if request.method in SAFE_METHODS:
            return True
        return getattr(obj, "host_id", None) == getattr(request.user, "id", None)
