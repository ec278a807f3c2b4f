import os
import shutil
import tempfile
from unittest import mock

from django.db import DatabaseError
from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.mock_store import MockUserStore
from apps.accounts.models import CustomUser
from apps.accounts.tests.factories import AdminFactory, CustomerFactory, SellerFactory
from apps.orders.tests.factories import OrderFactory, OrderItemFactory
from apps.products.models import Product
from apps.products.tests.factories import ProductFactory
from apps.support.models import CustomerFeedback
from apps.support.tests.factories import FeedbackFactory


class AdminTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = AdminFactory()
        self.client.force_authenticate(user=self.admin)


class MockStoreMixin:
    def use_temp_mock_store(self):
        directory = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, directory, ignore_errors=True)
        settings_override = override_settings(MOCK_USER_STORE_PATH=os.path.join(directory, 'users.json'))
        settings_override.enable()
        self.addCleanup(settings_override.disable)


class UserListTest(MockStoreMixin, AdminTestCase):
    def test_lists_all_accounts(self):
        CustomerFactory(is_active=False)
        SellerFactory()

        response = self.client.get('/api/v1/admin/users/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['pagination']['total'], 3)
        self.assertNotIn('mock', response.data)

    def test_role_filter_and_status(self):
        CustomerFactory(is_active=False)
        SellerFactory()

        response = self.client.get('/api/v1/admin/users/', {'role': 'customer'})

        self.assertEqual(len(response.data['data']), 1)
        self.assertEqual(response.data['data'][0]['status'], 'SUSPENDED')
        self.assertIsNone(response.data['data'][0]['company_name'])

    def test_customer_forbidden(self):
        self.client.force_authenticate(user=CustomerFactory())
        self.assertEqual(self.client.get('/api/v1/admin/users/').status_code, status.HTTP_403_FORBIDDEN)

    def test_falls_back_to_mock_store(self):
        self.use_temp_mock_store()

        with mock.patch('apps.backoffice.views.StandardPagination.paginate_queryset',
                        side_effect=DatabaseError('connection refused')):
            response = self.client.get('/api/v1/admin/users/', {'role': 'seller'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['mock'])
        self.assertEqual(response.data['pagination']['total'], 1)
        self.assertEqual(response.data['data'][0]['email'], 'seller@amzify.com')
        self.assertEqual(response.data['data'][0]['status'], 'ACTIVE')


class SellerAdminTest(MockStoreMixin, AdminTestCase):
    def test_seller_list(self):
        SellerFactory()
        CustomerFactory()

        response = self.client.get('/api/v1/admin/sellers/')

        self.assertEqual(response.data['pagination']['total'], 1)
        self.assertTrue(response.data['data'][0]['is_approved'])

    def test_seller_list_mock_fallback(self):
        self.use_temp_mock_store()

        with mock.patch('apps.backoffice.views.StandardPagination.paginate_queryset',
                        side_effect=DatabaseError('connection refused')):
            response = self.client.get('/api/v1/admin/sellers/')

        self.assertTrue(response.data['mock'])
        self.assertEqual(response.data['data'][0]['company_name'], 'Mock Seller Co.')

    def test_pending_sellers(self):
        pending = SellerFactory(profile__is_approved=False)
        SellerFactory()

        response = self.client.get('/api/v1/admin/sellers/pending/')

        self.assertEqual([row['id'] for row in response.data['data']], [pending.id])

    def test_approve_seller(self):
        seller = SellerFactory(profile__is_approved=False)

        response = self.client.patch(f'/api/v1/admin/sellers/{seller.id}/approval/',
                                     {'is_approved': True}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Seller approved successfully')
        seller.seller_profile.refresh_from_db()
        self.assertTrue(seller.seller_profile.is_approved)
        self.assertIsNotNone(seller.seller_profile.approval_date)

    def test_approve_unknown_seller(self):
        response = self.client.patch('/api/v1/admin/sellers/999999/approval/',
                                     {'is_approved': False}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Seller not found')

    def test_toggle_user_status(self):
        customer = CustomerFactory()

        response = self.client.patch(f'/api/v1/admin/users/{customer.id}/toggle-status/')
        self.assertEqual(response.data['message'], 'User deactivated successfully')

        response = self.client.patch(f'/api/v1/admin/users/{customer.id}/toggle-status/')
        self.assertEqual(response.data['message'], 'User activated successfully')
        customer.refresh_from_db()
        self.assertTrue(customer.is_active)

    def test_toggle_unknown_user(self):
        response = self.client.patch('/api/v1/admin/users/999999/toggle-status/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_create_mock_seller(self):
        self.use_temp_mock_store()

        response = self.client.post('/api/v1/admin/mock-sellers/', {
            'email': 'New.Seller@Example.com',
            'password': 'secret1',
            'name': 'Ravi',
            'storeName': 'Ravi Textiles',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['user']['email'], 'new.seller@example.com')
        self.assertEqual(response.data['user']['last_name'], 'Seller')
        self.assertTrue(response.data['user']['seller_approved'])
        stored = MockUserStore().find_by_email('new.seller@example.com')
        self.assertTrue(MockUserStore.check_password(stored, 'secret1'))
        self.assertFalse(CustomUser.objects.filter(email='new.seller@example.com').exists())

    def test_mock_seller_password_too_short(self):
        response = self.client.post('/api/v1/admin/mock-sellers/', {
            'email': 'x@example.com', 'password': '123', 'name': 'X', 'storeName': 'X',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class CatalogueAdminTest(AdminTestCase):
    def test_pending_products_by_default(self):
        pending = ProductFactory(status='pending_approval')
        ProductFactory()

        response = self.client.get('/api/v1/admin/products/')

        self.assertEqual([row['id'] for row in response.data['data']], [pending.id])

    def test_reject_product(self):
        product = ProductFactory(status='pending_approval')

        response = self.client.patch(f'/api/v1/admin/products/{product.id}/approval/',
                                     {'status': 'nope'}, format='json')

        self.assertEqual(response.data['message'], 'Product rejected successfully')
        product.refresh_from_db()
        self.assertEqual(product.status, 'rejected')

    def test_approve_product(self):
        product = ProductFactory(status='pending_approval')
        self.client.patch(f'/api/v1/admin/products/{product.id}/approval/', {'status': 'approved'}, format='json')
        self.assertEqual(Product.objects.get(pk=product.pk).status, 'active')

    def test_unknown_product(self):
        response = self.client.patch('/api/v1/admin/products/999999/approval/', {'status': 'approved'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_orders_with_status_filter(self):
        order = OrderFactory(status='shipped')
        OrderItemFactory(order=order)
        OrderItemFactory(order=order)
        OrderFactory()

        response = self.client.get('/api/v1/admin/orders/', {'status': 'shipped'})

        self.assertEqual(response.data['pagination']['total'], 1)
        self.assertEqual(response.data['data'][0]['items_count'], 2)
        self.assertEqual(response.data['data'][0]['customer_email'], order.customer.email)


class FeedbackAdminTest(AdminTestCase):
    def test_stats(self):
        FeedbackFactory(rating=5, feedback_type='praise')
        FeedbackFactory(rating=2, feedback_type='bug', status='reviewed')
        FeedbackFactory(rating=None, status='closed')

        response = self.client.get('/api/v1/admin/feedback/stats/')
        data = response.data['data']

        self.assertEqual(data['total'], 3)
        self.assertEqual(data['new'], 1)
        self.assertEqual(data['under_review'], 1)
        self.assertEqual(data['closed'], 1)
        self.assertEqual(data['avg_rating'], 3.5)
        self.assertEqual(data['by_type']['bug'], 1)
        self.assertEqual(data['by_type']['complaint'], 0)

    def test_list_filters(self):
        FeedbackFactory(feedback_type='bug')
        FeedbackFactory(feedback_type='praise')

        response = self.client.get('/api/v1/admin/feedback/', {'type': 'bug'})

        self.assertEqual(response.data['pagination']['total'], 1)
        self.assertEqual(response.data['data'][0]['type'], 'bug')

    def test_update_status_with_response(self):
        feedback = FeedbackFactory()

        response = self.client.patch(f'/api/v1/admin/feedback/{feedback.id}/', {
            'status': 'closed',
            'admin_response': 'Fixed in the latest release',
        }, format='json')

        self.assertEqual(response.data['message'], 'Feedback updated successfully')
        feedback.refresh_from_db()
        self.assertEqual(feedback.status, 'closed')
        self.assertEqual(feedback.responded_by, self.admin)
        self.assertIsNotNone(feedback.responded_at)

    def test_update_status_only(self):
        feedback = FeedbackFactory()
        self.client.patch(f'/api/v1/admin/feedback/{feedback.id}/', {'status': 'reviewed'}, format='json')
        feedback.refresh_from_db()
        self.assertIsNone(feedback.responded_by)

    def test_respond(self):
        feedback = FeedbackFactory()

        response = self.client.post(f'/api/v1/admin/feedback/{feedback.id}/respond/',
                                    {'response': 'Thanks for telling us'}, format='json')

        self.assertEqual(response.data['message'], 'Response sent successfully')
        feedback = CustomerFeedback.objects.get(pk=feedback.pk)
        self.assertEqual(feedback.status, 'responded')
        self.assertEqual(feedback.admin_response, 'Thanks for telling us')

    def test_respond_unknown(self):
        response = self.client.post('/api/v1/admin/feedback/999999/respond/', {'response': 'Hi'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Feedback not found')
