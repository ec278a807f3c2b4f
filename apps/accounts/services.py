import logging
import secrets
from datetime import timedelta

from django.conf import settings
from django.contrib.auth.hashers import check_password, make_password
from django.db import transaction
from django.utils import timezone

from .models import AccountDeletionRequest, EmailOtp, OtpVerification
from .tokens import revoke_user_tokens

logger = logging.getLogger(__name__)


def generate_otp():
    return f"{secrets.randbelow(900000) + 100000}"


class OtpError(Exception):
    """Raised when a submitted one-time code cannot be accepted"""


class OtpService:
    """Plain six digit codes for email verification and password reset, single use."""

    @staticmethod
    def expiry_minutes():
        return settings.MARKETPLACE_SETTINGS['OTP_EXPIRY_MINUTES']

    @classmethod
    def issue(cls, email, otp_type):
        return OtpVerification.objects.create(
            email=email,
            otp=generate_otp(),
            otp_type=otp_type,
            expires_at=timezone.now() + timedelta(minutes=cls.expiry_minutes()),
        )

    @staticmethod
    def consume(email, otp, otp_type):
        """Mark the newest matching live code as used. Returns False when there is none."""
        record = OtpVerification.objects.filter(
            email=email,
            otp=otp,
            otp_type=otp_type,
            is_used=False,
            expires_at__gt=timezone.now(),
        ).order_by('-created_at').first()
        if record is None:
            return False
        record.is_used = True
        record.save(update_fields=['is_used'])
        return True


class EmailOtpService:
    """Hashed codes, one per email, with a bounded number of verification attempts."""

    @staticmethod
    def issue(email):
        otp = generate_otp()
        EmailOtp.objects.update_or_create(
            email=email,
            defaults={
                'otp_hash': make_password(otp),
                'expires_at': timezone.now() + timedelta(
                    minutes=settings.MARKETPLACE_SETTINGS['EMAIL_OTP_EXPIRY_MINUTES']
                ),
                'attempts': 0,
            },
        )
        return otp

    @staticmethod
    def verify(email, otp):
        record = EmailOtp.objects.filter(email=email).first()
        if record is None or record.is_expired:
            if record is not None:
                record.delete()
            raise OtpError('OTP not found or expired')

        if record.attempts >= settings.MARKETPLACE_SETTINGS['EMAIL_OTP_MAX_ATTEMPTS']:
            record.delete()
            raise OtpError('Maximum verification attempts exceeded')

        if not check_password(otp, record.otp_hash):
            record.attempts += 1
            record.save(update_fields=['attempts'])
            raise OtpError('Invalid OTP')

        record.delete()
        return True


class AccountService:
    @staticmethod
    @transaction.atomic
    def delete_customer_account(user, reason=''):
        """
        Remove a customer and everything tied to them. Feedback survives
        without its author and the deletion request is kept as an audit record.
        """
        from apps.cart.models import CartItem
        from apps.support.models import CustomerFeedback, SupportTicket

        email = user.email
        deletion_request = AccountDeletionRequest.objects.create(user=user, email=email, reason=reason or '')

        revoke_user_tokens(user)
        CartItem.objects.filter(user=user).delete()
        user.addresses.all().delete()
        SupportTicket.objects.filter(user=user).delete()
        CustomerFeedback.objects.filter(customer=user).update(customer=None)

        AccountDeletionRequest.objects.filter(user=user).exclude(status='completed').update(
            status='completed', processed_at=timezone.now()
        )
        user.delete()
        deletion_request.refresh_from_db()
        logger.info("Deleted customer account %s", email)
        return deletion_request
