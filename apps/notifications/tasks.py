import logging

from celery import shared_task

from .emails import EmailService

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3)
def send_feedback_alert_task(self, feedback_id):
    """
    Async task to alert the admin inbox about new customer feedback
    """
    from apps.support.models import CustomerFeedback

    try:
        feedback = CustomerFeedback.objects.get(id=feedback_id)
    except CustomerFeedback.DoesNotExist:
        logger.warning("Feedback %s vanished before its alert was sent", feedback_id)
        return False

    if not EmailService().send_feedback_alert(feedback):
        raise self.retry(countdown=60)
    return True


@shared_task(bind=True, max_retries=3)
def send_seller_application_decision_task(self, application_id):
    """
    Async task to tell an applicant that their seller application was approved or rejected
    """
    from apps.sellers.models import SellerApplication

    try:
        application = SellerApplication.objects.get(id=application_id)
    except SellerApplication.DoesNotExist:
        logger.warning("Seller application %s vanished before its decision was sent", application_id)
        return False

    if application.status == 'pending':
        return False

    if not EmailService().send_seller_application_decision(application):
        raise self.retry(countdown=60)
    return True


def enqueue(task, *args):
    """
    Hand a task to the broker. The caller's work is already committed,
    so a broker outage is logged rather than raised.
    """
    try:
        return task.delay(*args)
    except Exception as e:
        logger.error("Could not queue %s%s: %s", task.name, args, e)
        return None
