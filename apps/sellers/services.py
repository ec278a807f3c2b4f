import logging

from django.db import transaction
from django.utils import timezone

from apps.accounts.models import CustomUser
from .models import SellerApplication, SellerProfile

logger = logging.getLogger(__name__)


class ApplicationError(Exception):
    """A review action that the application's current state does not allow"""


class SellerApplicationService:
    @staticmethod
    def ensure_can_apply(email):
        """Raise ApplicationError when this email cannot open a new application"""
        existing = SellerApplication.objects.filter(
            email=email, status__in=['pending', 'approved']
        ).order_by('-created_at').first()
        if existing is not None:
            if existing.status == 'approved':
                raise ApplicationError('Email already registered as seller')
            raise ApplicationError('Application already submitted and under review')

        if CustomUser.objects.filter(email=email).exists():
            raise ApplicationError('Email already registered')

    @staticmethod
    @transaction.atomic
    def approve(application, reviewer, category=None):
        """
        Turn a pending application into a seller account.

        The user is created with the applicant's stored password hash and an
        approved profile. Everything happens in one transaction so a failure
        leaves the application pending.
        """
        application = SellerApplication.objects.select_for_update().get(pk=application.pk)
        if application.status != 'pending':
            raise ApplicationError('Application already processed')

        if CustomUser.objects.filter(email=application.email).exists():
            raise ApplicationError('Email already registered')

        now = timezone.now()
        user = CustomUser.objects.create_user_with_hash(
            email=application.email,
            password_hash=application.password_hash,
            role=CustomUser.ROLE_SELLER,
            first_name=application.first_name,
            last_name=application.last_name,
            phone=application.phone,
            is_verified=True,
            is_active=True,
        )
        SellerProfile.objects.create(
            user=user,
            category=category,
            company_name=application.company_name,
            business_type=application.business_type,
            description=application.business_description,
            business_address=application.business_address,
            city=application.city,
            state=application.state,
            postal_code=application.postal_code,
            gst_number=application.gst_number,
            pan_number=application.pan_number,
            bank_name=application.bank_name,
            account_number=application.account_number,
            ifsc_code=application.ifsc_code,
            account_holder_name=application.account_holder_name,
            is_approved=True,
            approval_date=now,
        )

        application.status = 'approved'
        application.reviewed_by = reviewer
        application.reviewed_at = now
        application.save()
        logger.info("Seller application %s approved by %s", application.pk, reviewer)
        return application

    @staticmethod
    @transaction.atomic
    def reject(application, reviewer, reason):
        application = SellerApplication.objects.select_for_update().get(pk=application.pk)
        if application.status != 'pending':
            raise ApplicationError('Application already processed')

        application.status = 'rejected'
        application.rejection_reason = reason
        application.reviewed_by = reviewer
        application.reviewed_at = timezone.now()
        application.save()
        logger.info("Seller application %s rejected by %s", application.pk, reviewer)
        return application
