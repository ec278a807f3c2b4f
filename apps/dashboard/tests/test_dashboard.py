from datetime import datetime
from decimal import Decimal

from django.core.cache import cache
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.tests.factories import AdminFactory, CustomerFactory, SellerFactory
from apps.dashboard.services import month_start
from apps.orders.tests.factories import OrderFactory, OrderItemFactory
from apps.products.tests.factories import ProductFactory


class MonthStartTest(TestCase):
    def test_wraps_across_years(self):
        dt = timezone.make_aware(datetime(2024, 2, 15, 13, 30))
        self.assertEqual(month_start(dt, 3).date(), datetime(2023, 11, 1).date())
        self.assertEqual(month_start(dt, -1).date(), datetime(2024, 3, 1).date())
        self.assertEqual(month_start(dt).hour, 0)


class SellerStatsTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.seller = SellerFactory()
        self.client.force_authenticate(user=self.seller)

    def test_stats_for_window(self):
        product = ProductFactory(seller=self.seller, price=Decimal('100.00'))
        OrderItemFactory(product=product, quantity=2)
        OrderItemFactory(product=product, quantity=1)
        OrderItemFactory()  # another seller

        response = self.client.get('/api/v1/analytics/seller/stats/', {'timeRange': '7d'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        stats = response.data['data']['stats']
        self.assertEqual(stats['total_orders'], 2)
        self.assertEqual(stats['total_revenue'], 300.0)
        self.assertEqual(stats['avg_order_value'], 150.0)
        self.assertEqual(stats['total_products'], 1)
        self.assertEqual(response.data['data']['top_products'][0]['total_sold'], 3)
        self.assertEqual(len(response.data['data']['trend']), 1)

    def test_empty_seller(self):
        response = self.client.get('/api/v1/analytics/seller/stats/')
        self.assertEqual(response.data['data']['stats']['avg_order_value'], 0.0)
        self.assertEqual(response.data['data']['top_products'], [])

    def test_unknown_time_range(self):
        response = self.client.get('/api/v1/analytics/seller/stats/', {'timeRange': '2w'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_customer_forbidden(self):
        self.client.force_authenticate(user=CustomerFactory())
        response = self.client.get('/api/v1/analytics/seller/stats/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class AdminStatsTest(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.client.force_authenticate(user=AdminFactory())

    def tearDown(self):
        cache.clear()

    def test_overview_and_top_sellers(self):
        seller = SellerFactory()
        OrderItemFactory(product=ProductFactory(seller=seller), order=OrderFactory(total_amount=Decimal('250.00')))

        response = self.client.get('/api/v1/analytics/admin/stats/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data['data']
        self.assertEqual(data['overview']['total_orders'], 1)
        self.assertEqual(data['overview']['total_revenue'], 250.0)
        self.assertEqual(data['recent_activity']['orders'], 1)
        self.assertEqual(data['top_sellers'][0]['id'], seller.id)

    def test_sellers_without_sales_rank_last(self):
        idle = SellerFactory()
        earner = SellerFactory()
        OrderItemFactory(product=ProductFactory(seller=earner), total_price=Decimal('10000.00'))

        response = self.client.get('/api/v1/analytics/admin/stats/')

        ranking = response.data['data']['top_sellers']
        self.assertEqual([row['id'] for row in ranking], [earner.id, idle.id])
        self.assertEqual(ranking[0]['revenue'], 10000.0)
        self.assertEqual(ranking[1]['revenue'], 0.0)
        self.assertEqual(ranking[1]['orders_count'], 0)

    def test_result_is_cached(self):
        self.client.get('/api/v1/analytics/admin/stats/')
        OrderFactory()

        response = self.client.get('/api/v1/analytics/admin/stats/')
        self.assertEqual(response.data['data']['overview']['total_orders'], 0)


class SellerDashboardTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.seller = SellerFactory()
        self.client.force_authenticate(user=self.seller)
        self.product = ProductFactory(seller=self.seller, price=Decimal('80.00'))

    def test_dashboard_sections(self):
        order = OrderFactory()
        OrderItemFactory(order=order, product=self.product, quantity=2)
        OrderItemFactory(order=order)

        response = self.client.get('/api/v1/seller/dashboard/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data['data']
        self.assertEqual(data['stats']['total_revenue'], 160.0)
        self.assertEqual(data['stats']['avg_rating'], 4.5)
        self.assertEqual(len(data['recent_orders'][0]['items']), 1)
        self.assertEqual(data['top_products'][0]['total_sold'], 2)
        self.assertEqual(data['analytics']['orders_today'], 1)
        self.assertEqual(data['analytics']['conversion_rate'], '1.0')

    def test_recent_orders_limit(self):
        for _ in range(3):
            OrderItemFactory(product=self.product)

        response = self.client.get('/api/v1/seller/orders/', {'limit': 2})
        self.assertEqual(len(response.data['data']), 2)

    def test_trends_cover_six_months(self):
        OrderItemFactory(product=self.product)

        response = self.client.get('/api/v1/seller/dashboard/trends/')

        series = response.data['data']['revenue']
        self.assertEqual(len(series), 6)
        self.assertEqual(series[-1]['month'], timezone.localtime().strftime('%b'))
        self.assertEqual(series[-1]['orders'], 1)
        self.assertEqual(series[-1]['products'], 1)
