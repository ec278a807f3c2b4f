from decimal import Decimal

import factory

from apps.accounts.tests.factories import SellerFactory
from apps.products.models import Category, Product, ProductVariant


class CategoryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f"Category {n}")
    description = 'Test category'
    is_active = True


class ProductFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Product

    seller = factory.SubFactory(SellerFactory)
    category = factory.SubFactory(CategoryFactory)
    name = factory.Sequence(lambda n: f"Product {n}")
    description = 'A product for testing'
    price = Decimal('100.00')
    stock_quantity = 20
    status = 'active'
    images = factory.LazyFunction(lambda: ['https://cdn.example.com/p.jpg'])


class ProductVariantFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ProductVariant

    product = factory.SubFactory(ProductFactory)
    name = 'Size'
    value = factory.Iterator(['S', 'M', 'L', 'XL'])
    price_adjustment = Decimal('10.00')
    stock_quantity = 5
