import factory

from apps.accounts.tests.factories import CustomerFactory
from apps.support.models import CustomerFeedback, SupportTicket


class FeedbackFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = CustomerFeedback

    customer = factory.SubFactory(CustomerFactory)
    name = factory.LazyAttribute(lambda o: o.customer.full_name if o.customer else 'Anonymous')
    email = factory.LazyAttribute(lambda o: o.customer.email if o.customer else 'anonymous@example.com')
    feedback_type = 'general'
    rating = 4
    message = 'Delivery was quick and the packaging was good.'


class SupportTicketFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = SupportTicket

    user = factory.SubFactory(CustomerFactory)
    subject = 'Where is my order?'
    message = 'It has been a week since I ordered.'
