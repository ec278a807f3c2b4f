import factory

from apps.logistics.models import OrderTracking
from apps.orders.tests.factories import OrderFactory


class OrderTrackingFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = OrderTracking

    order = factory.SubFactory(OrderFactory)
    status = 'processing'
    description = 'Order is being prepared for shipment'
