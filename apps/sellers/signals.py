from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from apps.notifications.tasks import enqueue, send_seller_application_decision_task
from .models import SellerApplication


@receiver(post_save, sender=SellerApplication)
def notify_applicant_on_decision(sender, instance, created, **kwargs):
    """
    Email the applicant once their application leaves the pending state
    """
    previous = getattr(instance, '_previous_status', None)
    if created or previous == instance.status or instance.status == 'pending':
        return
    transaction.on_commit(lambda: enqueue(send_seller_application_decision_task, instance.id))
