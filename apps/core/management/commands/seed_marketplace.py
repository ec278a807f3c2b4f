from django.conf import settings
from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import CustomUser
from apps.products.models import Category

DEFAULT_CATEGORIES = [
    ('Electronics', 'Phones, laptops, audio and accessories'),
    ('Fashion', 'Clothing, footwear and accessories'),
    ('Home & Kitchen', 'Furniture, decor and kitchen essentials'),
    ('Beauty & Personal Care', 'Skincare, haircare and grooming'),
    ('Books', 'Fiction, non-fiction and education'),
    ('Sports & Outdoors', 'Fitness equipment and outdoor gear'),
    ('Toys & Games', 'Toys, puzzles and board games'),
    ('Grocery', 'Everyday food and household supplies'),
]


class Command(BaseCommand):
    help = 'Create the platform admin account and the default product categories'

    def add_arguments(self, parser):
        parser.add_argument('--admin-email', default=settings.ADMIN_EMAIL)
        parser.add_argument('--admin-password', default='admin123')

    @transaction.atomic
    def handle(self, *args, **options):
        email = options['admin_email'].lower()
        admin = CustomUser.objects.filter(email=email).first()
        if admin is None:
            CustomUser.objects.create_superuser(
                email=email,
                password=options['admin_password'],
                first_name='Admin',
                last_name='User',
            )
            self.stdout.write(f"Created admin {email}")
        else:
            self.stdout.write(f"Admin {email} already exists")

        created = 0
        for name, description in DEFAULT_CATEGORIES:
            _, was_created = Category.objects.get_or_create(name=name, defaults={'description': description})
            created += was_created

        self.stdout.write(self.style.SUCCESS(
            f"Seeded marketplace: {created} new categories, {Category.objects.count()} total"
        ))
