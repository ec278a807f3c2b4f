from django.conf import settings
from django.core import mail
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.tests.factories import AdminFactory, CustomerFactory
from apps.support.models import CustomerFeedback, SupportTicket
from .factories import SupportTicketFactory

FEEDBACK_URL = '/api/v1/auth/feedback/'


class FeedbackSubmitTest(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_anonymous_feedback(self):
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(FEEDBACK_URL, {
                'type': 'bug',
                'rating': 2,
                'message': 'Checkout button does nothing',
            }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['feedback']['type'], 'bug')
        feedback = CustomerFeedback.objects.get()
        self.assertIsNone(feedback.customer)
        self.assertEqual(feedback.name, 'Anonymous')
        self.assertEqual(feedback.email, 'anonymous@example.com')
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, [settings.ADMIN_EMAIL])

    def test_signed_in_customer_is_attached(self):
        customer = CustomerFactory()
        self.client.force_authenticate(user=customer)

        response = self.client.post(FEEDBACK_URL, {
            'message': 'Love it',
            'name': 'Someone Else',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        feedback = CustomerFeedback.objects.get()
        self.assertEqual(feedback.customer, customer)
        self.assertEqual(feedback.email, customer.email)
        self.assertEqual(feedback.feedback_type, 'general')

    def test_bad_token_is_treated_as_anonymous(self):
        self.client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')
        response = self.client.post(FEEDBACK_URL, {'message': 'Hello'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_rating_out_of_range(self):
        response = self.client.post(FEEDBACK_URL, {'message': 'Hi', 'rating': 9}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data['success'])

    def test_message_required(self):
        response = self.client.post(FEEDBACK_URL, {'type': 'praise'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(CustomerFeedback.objects.exists())


class SupportTicketTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.customer = CustomerFactory()
        self.client.force_authenticate(user=self.customer)

    def test_open_ticket(self):
        response = self.client.post('/api/v1/support/tickets/', {
            'subject': 'Damaged item',
            'message': 'The box arrived crushed',
            'priority': 'high',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        ticket = SupportTicket.objects.get()
        self.assertEqual(ticket.user, self.customer)
        self.assertEqual(ticket.status, 'open')

    def test_customer_sees_only_own_tickets(self):
        SupportTicketFactory(user=self.customer)
        SupportTicketFactory()

        response = self.client.get('/api/v1/support/tickets/')
        self.assertEqual(response.data['pagination']['total'], 1)

    def test_admin_moves_ticket(self):
        ticket = SupportTicketFactory(user=self.customer)
        self.client.force_authenticate(user=AdminFactory())

        response = self.client.patch(f'/api/v1/support/tickets/{ticket.id}/status/',
                                     {'status': 'resolved'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        ticket.refresh_from_db()
        self.assertEqual(ticket.status, 'resolved')

    def test_customer_cannot_move_ticket(self):
        ticket = SupportTicketFactory(user=self.customer)
        response = self.client.patch(f'/api/v1/support/tickets/{ticket.id}/status/',
                                     {'status': 'closed'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
