import factory
from django.contrib.auth.hashers import make_password
from django.utils import timezone

from apps.sellers.models import SellerApplication, SellerProfile


class SellerProfileFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = SellerProfile

    user = factory.SubFactory('apps.accounts.tests.factories.UserFactory', role='seller')
    company_name = factory.Sequence(lambda n: f"Store {n} Pvt Ltd")
    business_type = 'Retail'
    city = 'Mumbai'
    state = 'Maharashtra'
    is_approved = True
    approval_date = factory.LazyFunction(timezone.now)


class SellerApplicationFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = SellerApplication

    email = factory.Sequence(lambda n: f"applicant_{n}@example.com")
    password_hash = factory.LazyFunction(lambda: make_password('seller123'))
    first_name = 'Asha'
    last_name = 'Rao'
    phone = '9876500000'
    company_name = factory.Sequence(lambda n: f"Applicant Store {n}")
    business_type = 'Retail'
    business_description = 'Handmade home decor'
    status = 'pending'
