from rest_framework.permissions import BasePermission

from .utils.constants import UserRole


class HasProfile(BasePermission):
    message = 'Complete your profile first'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and hasattr(request.user, 'profile'))


class IsPassenger(BasePermission):
    message = 'Only passengers can do this'

    def has_permission(self, request, view):
        return hasattr(request.user, 'profile') and request.user.profile.role == UserRole.PASSENGER


class IsOwner(BasePermission):
    message = 'Only vehicle owners can do this'

    def has_permission(self, request, view):
        return hasattr(request.user, 'profile') and request.user.profile.is_owner
