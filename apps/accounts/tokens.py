from django.conf import settings
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from rest_framework_simplejwt.tokens import RefreshToken, Token


class PasswordResetToken(Token):
    """Signed token carried by the reset link; only valid for resetting one email's password."""
    token_type = 'password_reset'
    lifetime = settings.PASSWORD_RESET_TOKEN_LIFETIME

    @classmethod
    def for_email(cls, email):
        token = cls()
        token['email'] = email
        return token


def issue_tokens(user):
    refresh = RefreshToken.for_user(user)
    refresh['email'] = user.email
    refresh['role'] = user.role
    return {
        'access_token': str(refresh.access_token),
        'refresh_token': str(refresh),
    }


def issue_detached_tokens(user_id, email, role):
    """Tokens for a user that only exists in the mock store, so nothing is tracked in the database."""
    refresh = RefreshToken()
    refresh[api_settings.USER_ID_CLAIM] = user_id
    refresh['email'] = email
    refresh['role'] = role
    return {
        'access_token': str(refresh.access_token),
        'refresh_token': str(refresh),
    }


def revoke_user_tokens(user):
    """Blacklist every refresh token ever issued to the user. Returns how many were newly revoked."""
    revoked = 0
    for token in OutstandingToken.objects.filter(user=user):
        _, created = BlacklistedToken.objects.get_or_create(token=token)
        if created:
            revoked += 1
    return revoked
