"""Role-based permissions shared by the traveler-facing APIs."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore

from .models import CustomUser


class IsTraveler(permissions.BasePermission):
    """Only traveler accounts (role ``user``) may book, review or see the traveler dashboard."""

    message = "Only traveler accounts can do this."

    def has_permission(self, request, view):  # type: ignore
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return user.role == CustomUser.RoleChoices.USER
