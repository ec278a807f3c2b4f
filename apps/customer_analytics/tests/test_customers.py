import csv
import io
from datetime import timedelta
from decimal import Decimal

from django.test import SimpleTestCase, TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.tests.factories import AddressFactory, CustomerFactory, SellerFactory
from apps.customer_analytics.services import CustomerAnalyticsService, customer_segment, customer_type
from apps.orders.models import Order
from apps.orders.tests.factories import OrderFactory, OrderItemFactory
from apps.products.tests.factories import ProductFactory
from apps.support.tests.factories import SupportTicketFactory


class SegmentRulesTest(SimpleTestCase):
    def setUp(self):
        self.now = timezone.now()

    def ago(self, days):
        return self.now - timedelta(days=days)

    def test_segments(self):
        self.assertEqual(customer_segment(3, 100, self.ago(200), self.now), 'loyal')
        self.assertEqual(customer_segment(1, Decimal('5000.01'), self.ago(1), self.now), 'high_value')
        self.assertEqual(customer_segment(2, 100, self.ago(61), self.now), 'at_risk')
        self.assertEqual(customer_segment(1, 100, self.ago(30), self.now), 'new')
        self.assertEqual(customer_segment(2, 100, self.ago(10), self.now), 'regular')

    def test_exactly_threshold_is_not_high_value(self):
        self.assertEqual(customer_segment(1, Decimal('5000'), self.ago(45), self.now), 'regular')

    def test_no_orders(self):
        self.assertEqual(customer_segment(0, 0, None, self.now), 'regular')

    def test_customer_type(self):
        self.assertEqual(customer_type(1), 'new')
        self.assertEqual(customer_type(2), 'returning')
        self.assertEqual(customer_type(3), 'loyal')


class CustomerAnalyticsBase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.seller = SellerFactory()
        self.product = ProductFactory(seller=self.seller, price=Decimal('100.00'))
        self.client.force_authenticate(user=self.seller)

    def buy(self, customer, quantity=1, days_ago=0):
        order = OrderFactory(customer=customer, status='delivered')
        OrderItemFactory(order=order, product=self.product, quantity=quantity)
        if days_ago:
            Order.objects.filter(pk=order.pk).update(created_at=timezone.now() - timedelta(days=days_ago))
        return order


class CustomerOverviewTest(CustomerAnalyticsBase):
    def test_overview_figures(self):
        regular = CustomerFactory()
        self.buy(regular)
        self.buy(regular, quantity=3)
        self.buy(CustomerFactory(), quantity=2)
        OrderItemFactory()  # another seller's sale

        response = self.client.get('/api/v1/customer-analytics/analytics/overview/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data['data']
        self.assertEqual(data['total_customers'], 2)
        self.assertEqual(data['new_customers_this_month'], 2)
        self.assertEqual(data['returning_customers'], 1)
        self.assertEqual(data['repeat_purchase_rate'], 50.0)
        self.assertEqual(data['average_order_value'], 200.0)
        self.assertEqual(data['customer_lifetime_value'], 300.0)

    def test_empty_seller(self):
        response = self.client.get('/api/v1/customer-analytics/analytics/overview/')
        self.assertEqual(response.data['data']['total_customers'], 0)
        self.assertEqual(response.data['data']['average_order_value'], 0)

    def test_date_range_must_be_ordered(self):
        response = self.client.get('/api/v1/customer-analytics/analytics/overview/', {
            'startDate': '2024-05-01', 'endDate': '2024-04-01',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_customer_cannot_access(self):
        self.client.force_authenticate(user=CustomerFactory())
        response = self.client.get('/api/v1/customer-analytics/analytics/overview/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class CustomerListTest(CustomerAnalyticsBase):
    def test_sorted_by_spend(self):
        small, big = CustomerFactory(), CustomerFactory()
        self.buy(small)
        self.buy(big, quantity=5)

        response = self.client.get('/api/v1/customer-analytics/customers/')

        self.assertEqual(response.data['total'], 2)
        self.assertEqual([row['id'] for row in response.data['data']], [big.id, small.id])
        self.assertEqual(response.data['data'][0]['total_spent'], 500.0)
        self.assertEqual(response.data['total_pages'], 1)

    def test_segment_filter_before_paging(self):
        loyal = CustomerFactory()
        for _ in range(3):
            self.buy(loyal)
        for _ in range(3):
            self.buy(CustomerFactory(), days_ago=90)

        response = self.client.get('/api/v1/customer-analytics/customers/', {'segment': 'at_risk', 'limit': 2})

        self.assertEqual(response.data['total'], 3)
        self.assertEqual(response.data['total_pages'], 2)
        self.assertEqual(len(response.data['data']), 2)
        self.assertTrue(all(row['customer_segment'] == 'at_risk' for row in response.data['data']))

    def test_search(self):
        target = CustomerFactory(email='priya.k@example.com')
        self.buy(target)
        self.buy(CustomerFactory())

        response = self.client.get('/api/v1/customer-analytics/customers/', {'search': 'priya'})
        self.assertEqual([row['id'] for row in response.data['data']], [target.id])

    def test_unknown_segment(self):
        response = self.client.get('/api/v1/customer-analytics/customers/', {'segment': 'vip'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_segmentation_counts(self):
        self.buy(CustomerFactory())
        self.buy(CustomerFactory(), days_ago=90)

        response = self.client.get('/api/v1/customer-analytics/segmentation/')
        data = response.data['data']
        self.assertEqual(data['new'], 1)
        self.assertEqual(data['at_risk'], 1)
        self.assertEqual(data['loyal'], 0)


class CustomerDetailTest(CustomerAnalyticsBase):
    def setUp(self):
        super().setUp()
        self.customer = CustomerFactory()

    def test_profile_only_shows_this_sellers_items(self):
        order = self.buy(self.customer, quantity=2)
        OrderItemFactory(order=order)
        AddressFactory(user=self.customer)
        SupportTicketFactory(user=self.customer)

        response = self.client.get(f'/api/v1/customer-analytics/customers/{self.customer.id}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data['data']
        self.assertEqual(data['stats']['total_orders'], 1)
        self.assertEqual(data['stats']['total_spent'], '200.00')
        self.assertEqual(data['stats']['average_order_value'], '200.00')
        self.assertEqual(len(data['orders'][0]['items']), 1)
        self.assertEqual(len(data['addresses']), 1)
        self.assertEqual(len(data['tickets']), 1)

    def test_unknown_customer(self):
        response = self.client.get('/api/v1/customer-analytics/customers/999999/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Customer not found')

    def test_activity_newest_first(self):
        order = self.buy(self.customer, days_ago=5)
        order.refresh_from_db()
        order.status = 'shipped'
        order.save()

        response = self.client.get(f'/api/v1/customer-analytics/customers/{self.customer.id}/activity/')

        events = response.data['data']
        self.assertEqual([e['type'] for e in events], ['order_update', 'order_placed'])
        self.assertEqual(events[0]['status'], 'shipped')

    def test_insights_without_orders(self):
        response = self.client.get(f'/api/v1/customer-analytics/customers/{self.customer.id}/ai-insights/')
        self.assertEqual(response.data['data']['churn_risk'], 'low')
        self.assertIsNone(response.data['data']['suggested_discount'])

    def test_insights_for_lapsed_customer(self):
        self.buy(self.customer, days_ago=70)
        self.buy(self.customer, days_ago=50)

        data = CustomerAnalyticsService(self.seller).insights(self.customer)

        self.assertEqual(data['order_frequency'], '20 days')
        self.assertEqual(data['days_since_last_order'], 50)
        self.assertEqual(data['next_purchase_prediction'], 'Within next 7 days')
        self.assertEqual(data['suggested_discount'], '15% to re-engage')
        self.assertEqual(data['churn_risk'], 'high')

    def test_insights_predict_days_until_next_order(self):
        self.buy(self.customer, days_ago=40)
        self.buy(self.customer, days_ago=10)

        data = CustomerAnalyticsService(self.seller).insights(self.customer)

        self.assertEqual(data['order_frequency'], '30 days')
        self.assertEqual(data['next_purchase_prediction'], 'Within next 20 days')
        self.assertIsNone(data['suggested_discount'])
        self.assertEqual(data['churn_risk'], 'low')

    def test_single_order_assumes_monthly_rhythm(self):
        self.buy(self.customer, days_ago=12)

        data = CustomerAnalyticsService(self.seller).insights(self.customer)

        self.assertEqual(data['order_frequency'], '30 days')
        self.assertEqual(data['next_purchase_prediction'], 'Within next 18 days')

    def test_insights_far_off_next_order(self):
        self.buy(self.customer, days_ago=100)
        self.buy(self.customer)

        data = CustomerAnalyticsService(self.seller).insights(self.customer)

        self.assertEqual(data['next_purchase_prediction'], 'More than 30 days')
        self.assertEqual(data['churn_risk'], 'low')

    def test_loyalty_reward_for_regulars(self):
        for days_ago in (40, 30, 20, 10):
            self.buy(self.customer, days_ago=days_ago)
        self.buy(self.customer)

        data = CustomerAnalyticsService(self.seller).insights(self.customer)

        self.assertEqual(data['order_frequency'], '10 days')
        self.assertEqual(data['next_purchase_prediction'], 'Within next 10 days')
        self.assertEqual(data['suggested_discount'], '10% loyalty reward')
        self.assertEqual(data['churn_risk'], 'low')

    def test_medium_churn_before_discount_kicks_in(self):
        self.buy(self.customer, days_ago=50)
        self.buy(self.customer, days_ago=30)

        data = CustomerAnalyticsService(self.seller).insights(self.customer)

        self.assertEqual(data['days_since_last_order'], 30)
        self.assertEqual(data['next_purchase_prediction'], 'Within next 7 days')
        self.assertIsNone(data['suggested_discount'])
        self.assertEqual(data['churn_risk'], 'medium')


class CustomerExportTest(CustomerAnalyticsBase):
    def read_csv(self, response):
        return list(csv.reader(io.StringIO(response.content.decode())))

    def test_customers_csv(self):
        customer = CustomerFactory()
        self.buy(customer, quantity=2)

        response = self.client.get('/api/v1/customer-analytics/export/customers/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response['Content-Type'], 'text/csv')
        self.assertIn('attachment; filename="customers_', response['Content-Disposition'])
        rows = self.read_csv(response)
        self.assertEqual(rows[0][0], 'Email')
        self.assertEqual(rows[1][0], customer.email)
        self.assertEqual(rows[1][4], '1')

    def test_purchase_report_csv(self):
        order = self.buy(CustomerFactory(), quantity=3)

        rows = self.read_csv(self.client.get('/api/v1/customer-analytics/export/purchase-report/'))

        self.assertEqual(len(rows), 2)
        self.assertEqual(rows[1][2], order.order_number)
        self.assertEqual(rows[1][5], '3')

    def test_repeat_customers_csv(self):
        repeat = CustomerFactory()
        self.buy(repeat)
        self.buy(repeat)
        self.buy(CustomerFactory())

        rows = self.read_csv(self.client.get('/api/v1/customer-analytics/export/repeat-customers/'))

        self.assertEqual(len(rows), 2)
        self.assertEqual(rows[1][0], repeat.email)
        self.assertEqual(rows[1][4], '2')
