import logging
from decimal import Decimal

from django.conf import settings
from django.db import transaction

from apps.products.models import Product, ProductVariant
from .models import CartItem

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal('0.01')


class CartError(Exception):
    """A cart change that cannot be made. Carries the HTTP status and extra response fields."""

    def __init__(self, message, status_code=400, **extra):
        super().__init__(message)
        self.status_code = status_code
        self.extra = extra


def tax_rate():
    return Decimal(settings.MARKETPLACE_SETTINGS['TAX_RATE'])


class CartService:
    @staticmethod
    def active_items(user):
        return CartItem.objects.filter(user=user, product__status='active').select_related('product', 'variant')

    @staticmethod
    def summary(items):
        subtotal = sum((item.total_price for item in items), Decimal('0'))
        tax = (subtotal * tax_rate()).quantize(TWO_PLACES)
        return {
            'items_count': len(items),
            'total_quantity': sum(item.quantity for item in items),
            'subtotal': subtotal.quantize(TWO_PLACES),
            'tax': tax,
            'total': (subtotal + tax).quantize(TWO_PLACES),
        }

    @staticmethod
    @transaction.atomic
    def add_item(user, product_id, quantity, variant_id=None):
        """
        Add a product to the cart, merging with an existing line for the same
        product and variant. Returns (item, created).
        """
        product = Product.objects.filter(pk=product_id, status='active').first()
        if product is None:
            raise CartError('Product not found or inactive', status_code=404)

        variant = None
        available = product.stock_quantity
        if variant_id:
            variant = ProductVariant.objects.filter(pk=variant_id, product=product).first()
            if variant is None:
                raise CartError('Product variant not found', status_code=404)
            available = variant.stock_quantity

        if quantity > available:
            raise CartError('Insufficient stock', available=available)

        item = CartItem.objects.select_for_update().filter(user=user, product=product, variant=variant).first()
        if item is None:
            item = CartItem.objects.create(user=user, product=product, variant=variant, quantity=quantity)
            return item, True

        new_quantity = item.quantity + quantity
        if new_quantity > available:
            raise CartError(
                'Total quantity exceeds available stock',
                available=available,
                current_in_cart=item.quantity,
            )
        item.quantity = new_quantity
        item.save(update_fields=['quantity', 'updated_at'])
        return item, False

    @staticmethod
    def update_quantity(item, quantity):
        available = item.available_stock
        if quantity > available:
            raise CartError('Insufficient stock', available=available)
        item.quantity = quantity
        item.save(update_fields=['quantity', 'updated_at'])
        return item
