import logging
import math
import random
import time
from datetime import timedelta
from decimal import Decimal

from django.db import transaction
from django.db.models import Count, Max, Q, Sum
from django.utils import timezone

from apps.orders.models import Order
from .models import OrderTracking

logger = logging.getLogger(__name__)

# Tracking entries with these statuses move the order along with them
ORDER_STATUS_UPDATES = {'shipped', 'delivered', 'cancelled'}

DELIVERY_OFFSET_DAYS = {'delivered': 0, 'shipped': 2, 'processing': 5}

CARRIER_SHARES = [('DHL Express', 45), ('FedEx', 30), ('Blue Dart', 25)]


def generate_tracking_number():
    return f"TRK{int(time.time() * 1000)}{random.randint(0, 999)}"


def display_tracking_number(order):
    return order.tracking_number or f"TRK{order.id:010d}"


def customer_name(order):
    return order.customer.full_name if order.customer else 'Deleted customer'


class TrackingService:
    @staticmethod
    @transaction.atomic
    def assign_tracking_number(order, carrier=None, user=None):
        order.tracking_number = generate_tracking_number()
        order.carrier = carrier or 'Standard'
        order.save(update_fields=['tracking_number', 'carrier', 'updated_at'])
        OrderTracking.objects.create(
            order=order,
            status='processing',
            description='Order is being prepared for shipment',
            created_by=user,
        )
        logger.info("Tracking number %s assigned to order %s", order.tracking_number, order.order_number)
        return order

    @staticmethod
    @transaction.atomic
    def add_event(order, status, description, location=None, user=None):
        event = OrderTracking.objects.create(
            order=order,
            status=status,
            description=description,
            location=location or None,
            created_by=user,
        )
        if status in ORDER_STATUS_UPDATES and order.status != status:
            order.status = status
            order._tracking_recorded = True
            order.save(update_fields=['status', 'updated_at'])
        return event

    @staticmethod
    def stats():
        tracked = Order.objects.filter(tracking_number__isnull=False)
        counts = tracked.aggregate(
            processing_orders=Count('id', filter=Q(status='processing')),
            shipped_orders=Count('id', filter=Q(status='shipped')),
            delivered_orders=Count('id', filter=Q(status='delivered')),
            cancelled_orders=Count('id', filter=Q(status='cancelled')),
            total_orders=Count('id'),
        )

        delivered = Order.objects.filter(status='delivered').annotate(
            delivered_at=Max('tracking_events__created_at', filter=Q(tracking_events__status='delivered'))
        ).filter(delivered_at__isnull=False)
        durations = [(order.delivered_at - order.created_at).days for order in delivered]
        counts['avg_delivery_days'] = round(sum(durations) / len(durations)) if durations else 0
        return counts


class SellerLogisticsService:
    """Warehouse, transport and returns figures for one seller's orders"""

    def __init__(self, seller):
        self.seller = seller

    def orders(self):
        return Order.objects.filter(items__seller=self.seller).distinct()

    def warehouse(self):
        orders = self.orders()
        return {
            'total_products': self.seller.products.count(),
            'active_orders': orders.filter(status__in=['processing', 'shipped']).count(),
            'pending_shipments': orders.filter(status='processing').count(),
            'warehouse_capacity': 85,
            'avg_processing_time': '2.3 hours',
        }

    def transportation(self):
        orders = self.orders()
        delivered = orders.filter(
            status='delivered', updated_at__gte=timezone.now() - timedelta(days=30)
        ).count()
        shipped = orders.filter(status='shipped').count()
        processing = orders.filter(status='processing').count()
        return {
            'delivered_orders': delivered,
            'in_transit': shipped,
            'first_mile': processing,
            'last_mile': shipped,
            'on_time_delivery': 94.5,
            'avg_delivery_time': '3.2 days',
            'carriers': [
                {'name': name, 'percentage': share, 'orders': math.floor(delivered * share / 100)}
                for name, share in CARRIER_SHARES
            ],
        }

    def shipments(self, limit=20):
        orders = self.orders().filter(
            status__in=['processing', 'shipped', 'delivered']
        ).select_related('customer').annotate(
            items_count=Count('items', filter=Q(items__seller=self.seller))
        ).order_by('-created_at')[:limit]

        return [
            {
                'id': order.id,
                'order_number': order.order_number,
                'customer': customer_name(order),
                'status': order.status,
                'shipping_address': order.shipping_address,
                'items': order.items_count,
                'estimated_delivery': (
                    order.created_at + timedelta(days=DELIVERY_OFFSET_DAYS.get(order.status, 5))
                ).date().isoformat(),
                'tracking_number': display_tracking_number(order),
                'created_at': order.created_at,
            }
            for order in orders
        ]

    def reverse_logistics(self, limit=10):
        mine = Q(items__seller=self.seller)
        orders = list(
            self.orders().filter(status='cancelled').select_related('customer').annotate(
                my_value=Sum('items__total_price', filter=mine),
            ).order_by('-updated_at')[:limit]
        )

        returns = []
        for order in orders:
            names = order.items.filter(seller=self.seller).values_list('product_name', flat=True)
            returns.append({
                'id': order.id,
                'order_number': order.order_number,
                'customer': customer_name(order),
                'reason': 'Customer Request',
                'status': 'Processing',
                'value': order.total_amount,
                'date': order.updated_at,
                'items': ', '.join(names),
            })

        total = len(orders)
        return {
            'total_returns': total,
            'total_return_value': sum((order.my_value or Decimal('0') for order in orders), Decimal('0')),
            'pending_returns': math.floor(total * 0.3),
            'processed_returns': math.floor(total * 0.7),
            'returns': returns,
        }

    def overview(self):
        return {
            'warehouse': self.warehouse(),
            'transportation': self.transportation(),
            'reverse_logistics': self.reverse_logistics(),
            'timestamp': timezone.now().isoformat(),
        }
