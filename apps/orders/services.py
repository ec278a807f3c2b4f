import logging
from decimal import Decimal

from django.conf import settings
from django.db import transaction
from django.db.models import F

from apps.cart.models import CartItem
from apps.products.models import Product, ProductVariant
from .models import Order, OrderItem

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal('0.01')


class OrderError(Exception):
    def __init__(self, message, status_code=400, **extra):
        super().__init__(message)
        self.status_code = status_code
        self.extra = extra


def calculate_totals(subtotal):
    config = settings.MARKETPLACE_SETTINGS
    tax = (subtotal * Decimal(config['TAX_RATE'])).quantize(TWO_PLACES)
    if subtotal > Decimal(config['FREE_SHIPPING_THRESHOLD']):
        shipping = Decimal('0.00')
    else:
        shipping = Decimal(config['FLAT_SHIPPING_FEE'])
    return {
        'subtotal': subtotal.quantize(TWO_PLACES),
        'tax_amount': tax,
        'shipping_amount': shipping,
        'total_amount': (subtotal + tax + shipping).quantize(TWO_PLACES),
    }


class OrderService:
    @staticmethod
    def _lines_from_cart(customer):
        return [
            {'product_id': item.product_id, 'variant_id': item.variant_id, 'quantity': item.quantity}
            for item in CartItem.objects.filter(user=customer)
        ]

    @staticmethod
    def _merge_lines(lines):
        """Fold repeated product/variant lines into one so stock is checked against the full amount."""
        merged = {}
        for line in lines:
            key = (line['product_id'], line.get('variant_id') or None)
            if key in merged:
                merged[key]['quantity'] += line['quantity']
            else:
                merged[key] = {'product_id': key[0], 'variant_id': key[1], 'quantity': line['quantity']}
        return list(merged.values())

    @classmethod
    @transaction.atomic
    def create(cls, customer, shipping_address, payment_method, items=None,
               billing_address=None, notes=''):
        """
        Place an order for the given lines, or for the customer's cart when
        no lines are passed. Stock is checked and decremented inside the same
        transaction. The cart is emptied only when it was the source of the order.
        """
        from_cart = not items
        lines = cls._merge_lines(cls._lines_from_cart(customer) if from_cart else items)
        if not lines:
            raise OrderError('Cart is empty')

        subtotal = Decimal('0')
        prepared = []
        for line in lines:
            product = Product.objects.select_for_update().filter(pk=line['product_id']).first()
            if product is None or product.status != 'active':
                name = product.name if product else line['product_id']
                raise OrderError(f"Product {name} is no longer available")

            variant = None
            available = product.stock_quantity
            unit_price = product.price
            if line.get('variant_id'):
                variant = ProductVariant.objects.select_for_update().filter(
                    pk=line['variant_id'], product=product
                ).first()
                if variant is None:
                    raise OrderError('Product variant not found', status_code=404)
                available = variant.stock_quantity
                unit_price = variant.unit_price

            quantity = line['quantity']
            if quantity > available:
                raise OrderError(
                    f"Insufficient stock for {product.name}",
                    available=available,
                    requested=quantity,
                )

            total_price = unit_price * quantity
            subtotal += total_price
            prepared.append((product, variant, quantity, unit_price, total_price))

        order = Order.objects.create(
            customer=customer,
            payment_method=payment_method,
            currency=settings.MARKETPLACE_SETTINGS['CURRENCY'],
            shipping_address=shipping_address,
            billing_address=billing_address,
            notes=notes or '',
            **calculate_totals(subtotal),
        )

        for product, variant, quantity, unit_price, total_price in prepared:
            OrderItem.objects.create(
                order=order,
                product=product,
                variant=variant,
                seller_id=product.seller_id,
                product_name=product.name,
                product_sku=product.sku,
                quantity=quantity,
                unit_price=unit_price,
                total_price=total_price,
            )
            if variant is not None:
                ProductVariant.objects.filter(pk=variant.pk).update(stock_quantity=F('stock_quantity') - quantity)
            else:
                Product.objects.filter(pk=product.pk).update(stock_quantity=F('stock_quantity') - quantity)

        if from_cart:
            CartItem.objects.filter(user=customer).delete()
        logger.info("Order %s placed by %s for %s", order.order_number, customer.email, order.total_amount)
        return order

    @staticmethod
    def update_status(order, new_status):
        order.status = new_status
        order.save(update_fields=['status', 'updated_at'])
        return order
