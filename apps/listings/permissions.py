"""Permissions for the listings API."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


class IsHostOwnerOrReadOnly(permissions.BasePermission):
    """Anyone may read; hosts may publish; only the owning host may edit or delete."""

    message = "Only the host who owns this listing can change it."

    def has_permission(self, request, view):  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        user = request.user
        if not user.is_authenticated:
            return False
        if getattr(view, "action", None) == "create":
            return user.is_host()
        return True

    def has_object_permission(self, request, view, obj):  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        return obj.host_id == request.user.id
