import logging
import smtplib

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.utils import timezone
from django.utils.html import strip_tags

from .models import Notification

logger = logging.getLogger(__name__)


class EmailService:
    @staticmethod
    def send_email(subject, recipient, template_name, context, user=None):
        """
        Send HTML email with plain text fallback and record it as a Notification.
        Returns True when the message was handed to the mail backend.
        """
        context = {'site_name': settings.SITE_NAME, 'frontend_url': settings.FRONTEND_URL, **context}
        html_content = render_to_string(f"notifications/emails/{template_name}", context)
        text_content = strip_tags(html_content)

        notification = Notification.objects.create(
            user=user,
            recipient=recipient,
            subject=subject,
            message=text_content,
        )

        email = EmailMultiAlternatives(
            subject=subject,
            body=text_content,
            from_email=settings.DEFAULT_FROM_EMAIL,
            to=[recipient]
        )
        email.attach_alternative(html_content, "text/html")

        try:
            email.send()
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Email '%s' to %s failed: %s", subject, recipient, e)
            notification.status = 'failed'
            notification.error_message = str(e)
            notification.save(update_fields=['status', 'error_message'])
            return False

        notification.status = 'sent'
        notification.sent_at = timezone.now()
        notification.save(update_fields=['status', 'sent_at'])
        logger.info("Email '%s' sent to %s", subject, recipient)
        return True

    # Specific email templates
    def send_otp(self, email, otp, otp_type, expiry_minutes):
        if otp_type == 'password_reset':
            subject = f"Password Reset - {settings.SITE_NAME}"
            heading = "Reset your password"
        else:
            subject = f"Verify Your Email - {settings.SITE_NAME}"
            heading = "Verify your email"
        return self.send_email(
            subject=subject,
            recipient=email,
            template_name="otp.html",
            context={'otp': otp, 'heading': heading, 'expiry_minutes': expiry_minutes},
        )

    def send_password_reset(self, user, reset_link):
        return self.send_email(
            subject=f"Reset Your {settings.SITE_NAME} Password",
            recipient=user.email,
            template_name="password_reset.html",
            context={'user': user, 'reset_link': reset_link},
            user=user,
        )

    def send_feedback_alert(self, feedback):
        return self.send_email(
            subject=f"New Customer Feedback - {feedback.feedback_type}",
            recipient=settings.ADMIN_EMAIL,
            template_name="feedback_alert.html",
            context={'feedback': feedback},
        )

    def send_seller_application_decision(self, application):
        if application.status == 'approved':
            subject = f"Your {settings.SITE_NAME} seller application was approved"
            template_name = "seller_application_approved.html"
        else:
            subject = f"Update on your {settings.SITE_NAME} seller application"
            template_name = "seller_application_rejected.html"
        return self.send_email(
            subject=subject,
            recipient=application.email,
            template_name=template_name,
            context={'application': application},
        )
