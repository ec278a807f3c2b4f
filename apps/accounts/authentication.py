from django.utils.translation import gettext_lazy as _
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken
from rest_framework_simplejwt.settings import api_settings


def has_database_user(token):
    """
    Tokens issued from the mock user store carry ids like "mock-admin-..."
    that can never match a database row.
    """
    user_id = token.get(api_settings.USER_ID_CLAIM)
    return user_id is not None and str(user_id).isdigit()


class AmzifyJWTAuthentication(JWTAuthentication):
    def get_user(self, validated_token):
        if not has_database_user(validated_token):
            raise InvalidToken(_('Token contained no recognizable user identification'))
        return super().get_user(validated_token)


class OptionalJWTAuthentication(AmzifyJWTAuthentication):
    """
    JWT authentication for endpoints that also serve anonymous callers.
    A bad or expired token leaves the request anonymous instead of failing it.
    """

    def authenticate(self, request):
        try:
            return super().authenticate(request)
        except (InvalidToken, AuthenticationFailed):
            return None
