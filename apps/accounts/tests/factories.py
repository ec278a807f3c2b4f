import factory
from faker import Faker

from apps.accounts.models import Address, CustomUser

fake = Faker()


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = CustomUser

    email = factory.Sequence(lambda n: f"customer_{n}@example.com")
    first_name = factory.LazyFunction(fake.first_name)
    last_name = factory.LazyFunction(fake.last_name)
    phone = factory.Sequence(lambda n: f"98765{n:05d}")
    role = CustomUser.ROLE_CUSTOMER
    is_active = True
    is_verified = True
    password = factory.PostGenerationMethodCall("set_password", "password123")


class CustomerFactory(UserFactory):
    pass


class SellerFactory(UserFactory):
    """Approved seller with a profile. Pass profile__is_approved=False for a pending one."""
    email = factory.Sequence(lambda n: f"seller_{n}@example.com")
    role = CustomUser.ROLE_SELLER
    profile = factory.RelatedFactory(
        'apps.sellers.tests.factories.SellerProfileFactory', factory_related_name='user'
    )


class AdminFactory(UserFactory):
    email = factory.Sequence(lambda n: f"admin_{n}@example.com")
    role = CustomUser.ROLE_ADMIN
    is_staff = True
    is_superuser = True


class AddressFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Address

    user = factory.SubFactory(CustomerFactory)
    label = 'Home'
    full_name = factory.LazyFunction(fake.name)
    street = factory.LazyFunction(fake.street_address)
    city = 'Bengaluru'
    state = 'Karnataka'
    postal_code = '560001'
