from django.db import models

from apps.accounts.models import CustomUser
from apps.orders.models import Order


class OrderTracking(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='tracking_events')
    status = models.CharField(max_length=30)
    description = models.TextField()
    location = models.CharField(max_length=255, blank=True, null=True)
    created_by = models.ForeignKey(CustomUser, on_delete=models.SET_NULL, null=True, blank=True,
                                   related_name='tracking_updates')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at', 'id']
        verbose_name = "Order Tracking Event"

    def __str__(self):
        return f"{self.order.order_number} - {self.status}"
