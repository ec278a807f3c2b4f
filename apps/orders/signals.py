import logging

from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import Order

logger = logging.getLogger(__name__)

STATUS_DESCRIPTIONS = {
    'confirmed': 'Order confirmed by the seller',
    'processing': 'Order is being prepared for shipment',
    'shipped': 'Order has been shipped',
    'delivered': 'Order has been delivered',
    'cancelled': 'Order has been cancelled',
    'refunded': 'Order has been refunded',
}


@receiver(post_save, sender=Order)
def record_status_change(sender, instance, created, **kwargs):
    """
    Add a tracking entry whenever an order changes status, unless the caller
    already wrote one for this change.
    """
    from apps.logistics.models import OrderTracking

    if created or getattr(instance, '_tracking_recorded', False):
        return
    prev = getattr(instance, '_previous_status', None)
    curr = instance.status
    if prev is None or prev == curr:
        return

    OrderTracking.objects.create(
        order=instance,
        status=curr,
        description=STATUS_DESCRIPTIONS.get(curr, f"Order status updated to {curr}"),
    )
    logger.info("Order %s status changed from %s to %s", instance.order_number, prev, curr)
