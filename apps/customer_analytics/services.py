import logging
from decimal import Decimal

from django.db.models import Count, Max, Min, Q, Sum
from django.utils import timezone

from apps.accounts.models import CustomUser
from apps.orders.models import Order

logger = logging.getLogger(__name__)

SEGMENTS = ['loyal', 'high_value', 'at_risk', 'new', 'regular']

HIGH_VALUE_THRESHOLD = Decimal('5000')


def days_since(moment, now=None):
    if moment is None:
        return None
    return ((now or timezone.now()) - moment).days


def customer_type(order_count):
    if order_count >= 3:
        return 'loyal'
    if order_count > 1:
        return 'returning'
    return 'new'


def customer_segment(order_count, total_spent, last_order_date, now=None):
    """
    First matching rule wins: loyal, high_value, at_risk, new, then regular.
    """
    idle_days = days_since(last_order_date, now)
    if idle_days is None:
        idle_days = 999

    if order_count >= 3:
        return 'loyal'
    if Decimal(total_spent or 0) > HIGH_VALUE_THRESHOLD:
        return 'high_value'
    if idle_days > 60 and order_count > 0:
        return 'at_risk'
    if idle_days <= 30 and order_count == 1:
        return 'new'
    return 'regular'


def display_name(user):
    return user.full_name.strip() or 'N/A'


class CustomerAnalyticsService:
    """
    Customer-level views over one seller's sales. A customer counts for the
    seller once they have an order containing at least one of the seller's items,
    and spend only includes those items.
    """

    def __init__(self, seller):
        self.seller = seller

    def customers_queryset(self, search=None, start_date=None, end_date=None):
        lookups = {'orders__items__seller': self.seller}
        if start_date:
            lookups['orders__created_at__date__gte'] = start_date
        if end_date:
            lookups['orders__created_at__date__lte'] = end_date

        # One filter() call so the annotations below aggregate over the same join
        queryset = CustomUser.objects.filter(role=CustomUser.ROLE_CUSTOMER, **lookups)
        if search:
            queryset = queryset.filter(
                Q(email__icontains=search) | Q(first_name__icontains=search)
                | Q(last_name__icontains=search) | Q(phone__icontains=search)
            )
        return queryset.annotate(
            total_orders=Count('orders', distinct=True),
            total_spent=Sum('orders__items__total_price'),
            last_order_date=Max('orders__created_at'),
            first_order_date=Min('orders__created_at'),
        )

    def enrich(self, customer, now=None):
        total_spent = customer.total_spent or Decimal('0')
        return {
            'id': customer.id,
            'name': display_name(customer),
            'email': customer.email,
            'phone': customer.phone or 'N/A',
            'total_orders': customer.total_orders,
            'total_spent': float(total_spent),
            'last_order_date': customer.last_order_date,
            'customer_type': customer_type(customer.total_orders),
            'customer_segment': customer_segment(
                customer.total_orders, total_spent, customer.last_order_date, now
            ),
        }

    def overview(self, start_date=None, end_date=None):
        rows = list(self.customers_queryset(start_date=start_date, end_date=end_date))
        month_start = timezone.localtime(timezone.now()).replace(day=1, hour=0, minute=0, second=0, microsecond=0)

        total_customers = len(rows)
        total_orders = sum(row.total_orders for row in rows)
        total_revenue = sum((row.total_spent or Decimal('0') for row in rows), Decimal('0'))
        returning = sum(1 for row in rows if row.total_orders > 1)

        return {
            'total_customers': total_customers,
            'new_customers_this_month': sum(1 for row in rows if row.created_at >= month_start),
            'returning_customers': returning,
            'repeat_purchase_rate': round(returning / total_customers * 100, 1) if total_customers else 0,
            'average_order_value': round(float(total_revenue) / total_orders, 2) if total_orders else 0,
            'customer_lifetime_value': round(float(total_revenue) / total_customers, 2) if total_customers else 0,
        }

    def customer_list(self, search=None, segment=None, start_date=None, end_date=None):
        now = timezone.now()
        queryset = self.customers_queryset(search, start_date, end_date).order_by('-total_spent', 'id')
        customers = [self.enrich(customer, now) for customer in queryset]
        if segment:
            customers = [c for c in customers if c['customer_segment'] == segment]
        return customers

    def seller_orders(self, customer):
        return Order.objects.filter(customer=customer, items__seller=self.seller).distinct().order_by('-created_at')

    def get_customer(self, customer_id):
        return CustomUser.objects.filter(pk=customer_id, role=CustomUser.ROLE_CUSTOMER).first()

    def profile(self, customer):
        orders = []
        total_spent = Decimal('0')
        for order in self.seller_orders(customer):
            items = list(order.items.filter(seller=self.seller).select_related('product'))
            order_total = sum((item.total_price for item in items), Decimal('0'))
            total_spent += order_total
            orders.append({
                'id': order.id,
                'order_number': order.order_number,
                'status': order.status,
                'created_at': order.created_at,
                'total': float(order_total),
                'items': [
                    {
                        'product_name': item.product_name,
                        'quantity': item.quantity,
                        'unit_price': float(item.unit_price),
                        'total_price': float(item.total_price),
                        'images': item.product.images if item.product else [],
                    }
                    for item in items
                ],
            })

        total_orders = len(orders)
        return {
            'profile': {
                'id': customer.id,
                'name': display_name(customer),
                'email': customer.email,
                'phone': customer.phone,
                'joined_date': customer.created_at,
                'customer_type': customer_type(total_orders),
            },
            'stats': {
                'total_orders': total_orders,
                'total_spent': f"{total_spent:.2f}",
                'average_order_value': f"{total_spent / total_orders:.2f}" if total_orders else 0,
            },
            'orders': orders,
            'addresses': [
                {
                    'id': address.id,
                    'label': address.label,
                    'street': address.street,
                    'city': address.city,
                    'state': address.state,
                    'postal_code': address.postal_code,
                    'country': address.country,
                    'is_default': address.is_default,
                }
                for address in customer.addresses.all()
            ],
            'tickets': [
                {
                    'id': ticket.id,
                    'subject': ticket.subject,
                    'status': ticket.status,
                    'priority': ticket.priority,
                    'created_at': ticket.created_at,
                }
                for ticket in customer.support_tickets.all()[:10]
            ],
        }

    def activity(self, customer, limit=50):
        events = []
        for order in self.seller_orders(customer).prefetch_related('tracking_events'):
            events.append({
                'type': 'order_placed',
                'description': f"Placed order {order.order_number}",
                'order_number': order.order_number,
                'created_at': order.created_at,
            })
            for event in order.tracking_events.all():
                events.append({
                    'type': 'order_update',
                    'description': event.description,
                    'order_number': order.order_number,
                    'status': event.status,
                    'created_at': event.created_at,
                })
        events.sort(key=lambda e: e['created_at'], reverse=True)
        return events[:limit]

    def insights(self, customer):
        dates = sorted(self.seller_orders(customer).values_list('created_at', flat=True))
        if not dates:
            return {
                'next_purchase_prediction': 'No purchase history available',
                'suggested_discount': None,
                'churn_risk': 'low',
            }

        idle_days = days_since(dates[-1])
        avg_gap = 30
        if len(dates) > 1:
            gaps = [(later - earlier).days for earlier, later in zip(dates, dates[1:])]
            avg_gap = sum(gaps) // len(gaps)

        expected_in = max(0, avg_gap - idle_days)
        if expected_in <= 7:
            prediction = 'Within next 7 days'
        elif expected_in <= 30:
            prediction = f"Within next {expected_in} days"
        else:
            prediction = 'More than 30 days'

        discount = None
        if idle_days > avg_gap * 1.5:
            discount = '15% to re-engage'
        elif len(dates) >= 5:
            discount = '10% loyalty reward'

        if idle_days > avg_gap * 2:
            churn = 'high'
        elif idle_days > avg_gap * 1.3:
            churn = 'medium'
        else:
            churn = 'low'

        return {
            'next_purchase_prediction': prediction,
            'suggested_discount': discount,
            'churn_risk': churn,
            'order_frequency': f"{avg_gap} days",
            'days_since_last_order': idle_days,
        }

    def segmentation(self):
        counts = dict.fromkeys(SEGMENTS, 0)
        now = timezone.now()
        for customer in self.customers_queryset():
            counts[customer_segment(customer.total_orders, customer.total_spent,
                                    customer.last_order_date, now)] += 1
        return counts

    # Export rows

    def customer_export_rows(self, start_date=None, end_date=None):
        queryset = self.customers_queryset(start_date=start_date, end_date=end_date).order_by('-total_spent')
        for customer in queryset:
            yield [
                customer.email, customer.first_name, customer.last_name, customer.phone or '',
                customer.total_orders, customer.total_spent or Decimal('0'),
                customer.last_order_date.isoformat() if customer.last_order_date else '',
            ]

    def purchase_export_rows(self, start_date=None, end_date=None):
        from apps.orders.models import OrderItem

        items = OrderItem.objects.filter(seller=self.seller, order__customer__isnull=False)
        if start_date:
            items = items.filter(order__created_at__date__gte=start_date)
        if end_date:
            items = items.filter(order__created_at__date__lte=end_date)
        for item in items.select_related('order', 'order__customer').order_by('-order__created_at'):
            customer = item.order.customer
            yield [
                customer.email, customer.full_name, item.order.order_number,
                item.order.created_at.isoformat(), item.product_name, item.quantity,
                item.unit_price, item.total_price,
            ]

    def repeat_customer_export_rows(self):
        queryset = self.customers_queryset().filter(total_orders__gt=1).order_by('-total_orders')
        for customer in queryset:
            yield [
                customer.email, customer.first_name, customer.last_name, customer.phone or '',
                customer.total_orders, customer.total_spent or Decimal('0'),
                customer.last_order_date.isoformat() if customer.last_order_date else '',
                customer.first_order_date.isoformat() if customer.first_order_date else '',
            ]
