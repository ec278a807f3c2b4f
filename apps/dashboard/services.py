import logging
from datetime import timedelta
from decimal import Decimal

from django.db.models import Count, DecimalField, Q, Sum
from django.db.models.functions import Coalesce, TruncDate
from django.utils import timezone

from apps.accounts.models import CustomUser
from apps.orders.models import Order, OrderItem
from apps.products.models import Product

logger = logging.getLogger(__name__)

TIME_RANGES = {
    '7d': timedelta(days=7),
    '30d': timedelta(days=30),
    '90d': timedelta(days=90),
    '1y': timedelta(days=365),
}


def month_start(dt, months_back=0):
    """First instant of the month `months_back` months before dt's month"""
    month_index = dt.year * 12 + (dt.month - 1) - months_back
    year, month = divmod(month_index, 12)
    return dt.replace(year=year, month=month + 1, day=1, hour=0, minute=0, second=0, microsecond=0)


def as_float(value):
    return float(value or 0)


class SellerAnalyticsService:
    """Figures over one seller's order items for a rolling window"""

    def __init__(self, seller, time_range='30d'):
        self.seller = seller
        self.since = timezone.now() - TIME_RANGES.get(time_range, TIME_RANGES['30d'])

    def items(self):
        return OrderItem.objects.filter(seller=self.seller, order__created_at__gte=self.since)

    def stats(self):
        totals = self.items().aggregate(
            total_orders=Count('order', distinct=True),
            total_customers=Count('order__customer', distinct=True),
            total_revenue=Sum('total_price'),
            total_products=Count('product', distinct=True),
            line_count=Count('id'),
        )
        line_count = totals.pop('line_count')
        revenue = as_float(totals['total_revenue'])
        totals['total_revenue'] = revenue
        # Average over order lines, the same unit the revenue is summed over
        totals['avg_order_value'] = round(revenue / line_count, 2) if line_count else 0.0
        return totals

    def top_products(self, limit=5):
        rows = self.items().values('product_id', 'product_name').annotate(
            total_sold=Sum('quantity'),
            revenue=Sum('total_price'),
        ).order_by('-total_sold')[:limit]
        return [
            {
                'id': row['product_id'],
                'name': row['product_name'],
                'total_sold': row['total_sold'],
                'revenue': as_float(row['revenue']),
            }
            for row in rows
        ]

    def trend(self, days=30):
        rows = self.items().annotate(date=TruncDate('order__created_at')).values('date').annotate(
            revenue=Sum('total_price'),
            orders=Count('order', distinct=True),
        ).order_by('-date')[:days]
        return [
            {'date': row['date'], 'revenue': as_float(row['revenue']), 'orders': row['orders']}
            for row in reversed(list(rows))
        ]


class AdminAnalyticsService:
    @staticmethod
    def overview():
        return {
            'total_customers': CustomUser.objects.filter(role=CustomUser.ROLE_CUSTOMER).count(),
            'total_sellers': CustomUser.objects.filter(role=CustomUser.ROLE_SELLER).count(),
            'active_products': Product.objects.filter(status='active').count(),
            'total_orders': Order.objects.count(),
            'total_revenue': as_float(Order.objects.aggregate(total=Sum('total_amount'))['total']),
        }

    @staticmethod
    def recent_activity():
        since = timezone.now() - timedelta(hours=24)
        return {
            'orders': Order.objects.filter(created_at__gte=since).count(),
            'users': CustomUser.objects.filter(created_at__gte=since).count(),
        }

    @staticmethod
    def top_sellers(limit=10):
        sellers = CustomUser.objects.filter(
            role=CustomUser.ROLE_SELLER, seller_profile__is_approved=True
        ).select_related('seller_profile').annotate(
            orders_count=Count('sold_items__order', distinct=True),
            revenue=Coalesce(Sum('sold_items__total_price'), Decimal('0'), output_field=DecimalField()),
        ).order_by('-revenue', 'id')[:limit]
        return [
            {
                'id': seller.id,
                'seller_name': seller.full_name,
                'company_name': seller.seller_profile.company_name,
                'orders_count': seller.orders_count,
                'revenue': as_float(seller.revenue),
            }
            for seller in sellers
        ]


class SellerDashboardService:
    """Numbers behind the seller panel home page"""

    def __init__(self, seller):
        self.seller = seller

    def items(self):
        return OrderItem.objects.filter(seller=self.seller)

    def stats(self):
        totals = self.items().aggregate(
            revenue=Sum('total_price'),
            orders=Count('order', distinct=True),
        )
        return {
            'total_revenue': as_float(totals['revenue']),
            'total_orders': totals['orders'],
            'total_products': self.seller.products.count(),
            'avg_rating': 4.5,
        }

    def recent_orders(self, limit=5):
        orders = Order.objects.filter(items__seller=self.seller).distinct().select_related(
            'customer'
        ).order_by('-created_at')[:limit]

        result = []
        for order in orders:
            customer = order.customer
            result.append({
                'id': order.id,
                'order_number': order.order_number,
                'customer_name': customer.full_name if customer else None,
                'customer_email': customer.email if customer else None,
                'total_amount': as_float(order.total_amount),
                'status': order.status,
                'created_at': order.created_at,
                'items': [
                    {'product_name': item.product_name, 'quantity': item.quantity, 'price': as_float(item.unit_price)}
                    for item in order.items.filter(seller=self.seller)
                ],
            })
        return result

    def top_products(self, limit=4):
        mine = Q(order_items__seller=self.seller)
        products = self.seller.products.annotate(
            total_sold=Sum('order_items__quantity', filter=mine),
            total_revenue=Sum('order_items__total_price', filter=mine),
        )
        ranked = sorted(products, key=lambda p: (p.total_sold or 0), reverse=True)[:limit]
        return [
            {
                'id': product.id,
                'name': product.name,
                'price': as_float(product.price),
                'images': product.images or [],
                'total_sold': product.total_sold or 0,
                'total_revenue': as_float(product.total_revenue),
                'status': product.status,
            }
            for product in ranked
        ]

    def analytics(self):
        now = timezone.now()
        thirty_days_ago = now - timedelta(days=30)
        today_start = timezone.localtime(now).replace(hour=0, minute=0, second=0, microsecond=0)

        monthly = self.items().filter(created_at__gte=thirty_days_ago).aggregate(
            revenue=Sum('total_price'),
            orders=Count('order', distinct=True),
        )
        orders_today = self.items().filter(created_at__gte=today_start).values('order').distinct().count()
        monthly_orders = monthly['orders']

        return {
            'monthly_revenue': as_float(monthly['revenue']),
            'orders_today': orders_today,
            'monthly_orders': monthly_orders,
            'conversion_rate': f"{min(monthly_orders, 100):.1f}",
        }

    def trends(self, months=6):
        now = timezone.localtime(timezone.now())
        series = []
        for back in range(months - 1, -1, -1):
            start = month_start(now, back)
            end = month_start(now, back - 1)
            window = {'created_at__gte': start, 'created_at__lt': end}

            totals = self.items().filter(**window).aggregate(
                revenue=Sum('total_price'),
                orders=Count('order', distinct=True),
            )
            series.append({
                'month': start.strftime('%b'),
                'revenue': as_float(totals['revenue']),
                'orders': totals['orders'],
                'products': self.seller.products.filter(**window).count(),
            })
        return {'revenue': series, 'orders': series, 'products': series}

    def dashboard(self):
        return {
            'stats': self.stats(),
            'recent_orders': self.recent_orders(),
            'top_products': self.top_products(),
            'analytics': self.analytics(),
        }
