from unittest import mock

from django.core import mail
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.models import CustomUser
from apps.accounts.tests.factories import AdminFactory, CustomerFactory
from apps.products.tests.factories import CategoryFactory
from apps.sellers.models import SellerApplication
from .factories import SellerApplicationFactory


class SellerApplicationSubmitTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.payload = {
            'email': 'Maker@Example.com',
            'password': 'seller123',
            'firstName': 'Meera',
            'lastName': 'Shah',
            'companyName': 'Meera Crafts',
            'businessType': 'Handicrafts',
        }

    def test_submit_application(self):
        response = self.client.post('/api/v1/auth/register/seller/', self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        application = SellerApplication.objects.get()
        self.assertEqual(application.email, 'maker@example.com')
        self.assertEqual(application.status, 'pending')
        self.assertNotEqual(application.password_hash, 'seller123')
        self.assertEqual(application.first_name, 'Meera')
        self.assertEqual(application.company_name, 'Meera Crafts')
        self.assertEqual(application.business_type, 'Handicrafts')
        self.assertNotIn('password_hash', response.data['application'])
        self.assertEqual(response.data['application']['status'], 'pending')

    def test_business_details_are_stored(self):
        self.payload.update({'gstNumber': '29ABCDE1234F1Z5', 'ifscCode': 'HDFC0001234', 'postalCode': '560001'})
        response = self.client.post('/api/v1/auth/apply/seller/', self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        application = SellerApplication.objects.get()
        self.assertEqual(application.gst_number, '29ABCDE1234F1Z5')
        self.assertEqual(application.ifsc_code, 'HDFC0001234')
        self.assertEqual(application.postal_code, '560001')

    def test_company_name_required(self):
        del self.payload['companyName']
        response = self.client.post('/api/v1/auth/apply/seller/', self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('companyName', response.data['errors'])

    def test_second_pending_application_is_refused(self):
        SellerApplicationFactory(email='maker@example.com')
        response = self.client.post('/api/v1/auth/apply/seller/', self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Application already submitted and under review')

    def test_existing_account_cannot_apply(self):
        CustomerFactory(email='maker@example.com')
        response = self.client.post('/api/v1/auth/register/seller/', self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Email already registered')


class SellerApplicationReviewTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = AdminFactory()
        self.client.force_authenticate(user=self.admin)

    def test_customer_cannot_review(self):
        self.client.force_authenticate(user=CustomerFactory())
        response = self.client.get('/api/v1/seller-applications/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_filters_by_status(self):
        SellerApplicationFactory()
        SellerApplicationFactory(status='rejected')

        response = self.client.get('/api/v1/seller-applications/', {'status': 'pending'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['pagination']['total'], 1)
        self.assertEqual(response.data['data'][0]['status'], 'pending')

    def test_approve_creates_seller_with_application_password(self):
        application = SellerApplicationFactory(email='approved@example.com')
        category = CategoryFactory()

        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(
                f'/api/v1/seller-applications/{application.id}/approve/',
                {'category_id': category.id}, format='json',
            )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        seller = CustomUser.objects.get(email='approved@example.com')
        self.assertEqual(seller.role, 'seller')
        self.assertTrue(seller.check_password('seller123'))
        self.assertTrue(seller.seller_profile.is_approved)
        self.assertEqual(seller.seller_profile.category, category)
        self.assertEqual(seller.seller_profile.company_name, application.company_name)

        application.refresh_from_db()
        self.assertEqual(application.status, 'approved')
        self.assertEqual(application.reviewed_by, self.admin)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].subject, 'Your Amzify seller application was approved')

    def test_approve_twice_is_refused(self):
        application = SellerApplicationFactory(status='approved')
        response = self.client.post(f'/api/v1/seller-applications/{application.id}/approve/', {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Application already processed')

    def test_approve_when_email_taken_keeps_application_pending(self):
        application = SellerApplicationFactory(email='clash@example.com')
        CustomerFactory(email='clash@example.com')

        response = self.client.post(f'/api/v1/seller-applications/{application.id}/approve/', {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Email already registered')
        application.refresh_from_db()
        self.assertEqual(application.status, 'pending')

    def test_reject_requires_reason(self):
        application = SellerApplicationFactory()
        response = self.client.post(f'/api/v1/seller-applications/{application.id}/reject/', {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('reason', response.data['errors'])

    def test_reject_records_reason_and_notifies(self):
        application = SellerApplicationFactory()

        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(
                f'/api/v1/seller-applications/{application.id}/reject/',
                {'reason': 'Incomplete GST details'}, format='json',
            )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        application.refresh_from_db()
        self.assertEqual(application.status, 'rejected')
        self.assertEqual(application.rejection_reason, 'Incomplete GST details')
        self.assertEqual(mail.outbox[0].subject, 'Update on your Amzify seller application')

    def test_stats_overview(self):
        SellerApplicationFactory()
        SellerApplicationFactory()
        SellerApplicationFactory(status='approved')

        response = self.client.get('/api/v1/seller-applications/stats/overview/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data'], {'pending': 2, 'approved': 1, 'rejected': 0, 'total': 3})

    def test_approval_survives_broker_outage(self):
        application = SellerApplicationFactory(email='offline@example.com')

        with mock.patch(
            'apps.notifications.tasks.send_seller_application_decision_task.delay',
            side_effect=OSError('broker unreachable'),
        ):
            with self.captureOnCommitCallbacks(execute=True):
                response = self.client.post(f'/api/v1/seller-applications/{application.id}/approve/', {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        application.refresh_from_db()
        self.assertEqual(application.status, 'approved')
        self.assertEqual(len(mail.outbox), 0)
