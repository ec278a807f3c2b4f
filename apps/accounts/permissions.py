from rest_framework import permissions


class IsCustomerPermission(permissions.BasePermission):
    """
    Permission check for customer users
    """
    message = 'Customer access required'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_customer)


class IsSellerPermission(permissions.BasePermission):
    """
    Permission check for seller users
    """
    message = 'Seller access required'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_seller)


class IsAdminPermission(permissions.BasePermission):
    """
    Permission check for admin users
    """
    message = 'Admin access required'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_admin)


class IsSellerOrAdminPermission(permissions.BasePermission):
    message = 'Insufficient permissions'

    def has_permission(self, request, view):
        return bool(
            request.user and request.user.is_authenticated
            and (request.user.is_seller or request.user.is_admin)
        )
