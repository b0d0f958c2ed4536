from rest_framework.permissions import BasePermission


class IsPlannerUser(BasePermission):
    """Allows access only to sessions with role 'planner'."""

    def has_permission(self, request, view):
        return bool(request.user and getattr(request.user, "role", None) == "planner")

