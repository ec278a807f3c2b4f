from decimal import Decimal

from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.tests.factories import AdminFactory, CustomerFactory, SellerFactory
from apps.cart.models import CartItem
from apps.cart.tests.factories import CartItemFactory
from apps.logistics.models import OrderTracking
from apps.orders.models import Order
from apps.orders.services import calculate_totals
from apps.products.tests.factories import ProductFactory, ProductVariantFactory
from .factories import OrderFactory, OrderItemFactory

ADDRESS = {
    'street_address': '12 MG Road',
    'city': 'Bengaluru',
    'state': 'Karnataka',
    'postal_code': '560001',
}


class TotalsTest(TestCase):
    def test_flat_shipping_at_or_below_threshold(self):
        totals = calculate_totals(Decimal('500.00'))
        self.assertEqual(totals['tax_amount'], Decimal('90.00'))
        self.assertEqual(totals['shipping_amount'], Decimal('50'))
        self.assertEqual(totals['total_amount'], Decimal('640.00'))

    def test_free_shipping_above_threshold(self):
        totals = calculate_totals(Decimal('500.01'))
        self.assertEqual(totals['shipping_amount'], Decimal('0.00'))


class CreateOrderTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.customer = CustomerFactory()
        self.client.force_authenticate(user=self.customer)

    def test_order_from_items(self):
        product = ProductFactory(price=Decimal('200.00'), stock_quantity=10, sku='SKU-1')

        response = self.client.post('/api/v1/orders/', {
            'items': [{'product_id': product.id, 'quantity': 3}],
            'shipping_address': ADDRESS,
            'payment_method': 'upi',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.data['data']
        self.assertTrue(data['order_number'].startswith('AMZ'))
        self.assertEqual(len(data['order_number']), 12)
        self.assertEqual(data['subtotal'], '600.00')
        self.assertEqual(data['tax_amount'], '108.00')
        self.assertEqual(data['shipping_amount'], '0.00')
        self.assertEqual(data['total_amount'], '708.00')
        self.assertEqual(data['shipping_address']['country'], 'India')
        self.assertEqual(data['items'][0]['product_sku'], 'SKU-1')
        self.assertEqual(data['items'][0]['seller_id'], product.seller_id)

        product.refresh_from_db()
        self.assertEqual(product.stock_quantity, 7)

    def test_order_from_cart_empties_cart(self):
        variant = ProductVariantFactory(stock_quantity=4)
        CartItemFactory(user=self.customer, product=variant.product, variant=variant, quantity=2)

        response = self.client.post('/api/v1/orders/', {
            'shipping_address': ADDRESS, 'payment_method': 'cod',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertFalse(CartItem.objects.filter(user=self.customer).exists())
        variant.refresh_from_db()
        self.assertEqual(variant.stock_quantity, 2)
        self.assertEqual(response.data['data']['items'][0]['unit_price'], '110.00')

    def test_empty_cart(self):
        response = self.client.post('/api/v1/orders/', {
            'shipping_address': ADDRESS, 'payment_method': 'cod',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Cart is empty')

    def test_insufficient_stock_rolls_back(self):
        plenty = ProductFactory(stock_quantity=10)
        scarce = ProductFactory(name='Scarce', stock_quantity=1)

        response = self.client.post('/api/v1/orders/', {
            'items': [
                {'product_id': plenty.id, 'quantity': 2},
                {'product_id': scarce.id, 'quantity': 2},
            ],
            'shipping_address': ADDRESS,
            'payment_method': 'card',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Insufficient stock for Scarce')
        self.assertEqual(response.data['available'], 1)
        self.assertEqual(response.data['requested'], 2)
        self.assertFalse(Order.objects.exists())
        plenty.refresh_from_db()
        self.assertEqual(plenty.stock_quantity, 10)

    def test_repeated_lines_are_checked_together(self):
        product = ProductFactory(name='Lamp', stock_quantity=5)

        response = self.client.post('/api/v1/orders/', {
            'items': [
                {'product_id': product.id, 'quantity': 3},
                {'product_id': product.id, 'quantity': 3},
            ],
            'shipping_address': ADDRESS,
            'payment_method': 'cod',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Insufficient stock for Lamp')
        self.assertEqual(response.data['available'], 5)
        self.assertEqual(response.data['requested'], 6)
        product.refresh_from_db()
        self.assertEqual(product.stock_quantity, 5)

    def test_repeated_lines_become_one_item(self):
        product = ProductFactory(stock_quantity=5)

        response = self.client.post('/api/v1/orders/', {
            'items': [
                {'product_id': product.id, 'quantity': 2},
                {'product_id': product.id, 'quantity': 3},
            ],
            'shipping_address': ADDRESS,
            'payment_method': 'cod',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(len(response.data['data']['items']), 1)
        self.assertEqual(response.data['data']['items'][0]['quantity'], 5)
        product.refresh_from_db()
        self.assertEqual(product.stock_quantity, 0)

    def test_order_from_items_keeps_cart(self):
        saved = CartItemFactory(user=self.customer)
        product = ProductFactory(stock_quantity=4)

        response = self.client.post('/api/v1/orders/', {
            'items': [{'product_id': product.id, 'quantity': 1}],
            'shipping_address': ADDRESS,
            'payment_method': 'upi',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(list(CartItem.objects.filter(user=self.customer)), [saved])

    def test_unavailable_product(self):
        product = ProductFactory(name='Gone', status='inactive')
        response = self.client.post('/api/v1/orders/', {
            'items': [{'product_id': product.id, 'quantity': 1}],
            'shipping_address': ADDRESS,
            'payment_method': 'cod',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Product Gone is no longer available')

    def test_missing_address_fields(self):
        response = self.client.post('/api/v1/orders/', {
            'shipping_address': {'city': 'Pune'}, 'payment_method': 'cod',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('shipping_address', response.data['errors'])


class OrderVisibilityTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.customer = CustomerFactory()
        self.order = OrderFactory(customer=self.customer)
        self.item = OrderItemFactory(order=self.order)

    def test_customer_sees_own_order(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.get(f'/api/v1/orders/{self.order.id}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['customer_email'], self.customer.email)

    def test_other_customer_gets_404(self):
        self.client.force_authenticate(user=CustomerFactory())
        response = self.client.get(f'/api/v1/orders/{self.order.id}/')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Order not found')

    def test_seller_with_items_sees_order(self):
        self.client.force_authenticate(user=self.item.seller)
        response = self.client.get(f'/api/v1/orders/{self.order.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_unrelated_seller_gets_404(self):
        self.client.force_authenticate(user=SellerFactory())
        response = self.client.get(f'/api/v1/orders/{self.order.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_my_orders_pages_by_ten(self):
        OrderFactory.create_batch(11, customer=self.customer)
        self.client.force_authenticate(user=self.customer)

        response = self.client.get('/api/v1/orders/my-orders/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['data']), 10)
        self.assertEqual(response.data['pagination']['total'], 12)
        self.assertEqual(response.data['pagination']['pages'], 2)

    def test_seller_orders_only_count_their_items(self):
        seller = self.item.seller
        OrderItemFactory(order=self.order, product=ProductFactory(seller=seller, price=Decimal('40.00')), quantity=2)
        OrderItemFactory(order=self.order)
        self.client.force_authenticate(user=seller)

        response = self.client.get('/api/v1/orders/seller/my-orders/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        row = response.data['data'][0]
        self.assertEqual(row['my_items_count'], 2)
        self.assertEqual(row['my_total'], '180.00')
        self.assertEqual(row['email'], self.customer.email)


class OrderStatusTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.order = OrderFactory()
        self.item = OrderItemFactory(order=self.order)

    def test_customer_cannot_update_status(self):
        self.client.force_authenticate(user=self.order.customer)
        response = self.client.patch(f'/api/v1/orders/{self.order.id}/status/', {'status': 'shipped'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['error'], 'Insufficient permissions')

    def test_unrelated_seller_is_denied(self):
        self.client.force_authenticate(user=SellerFactory())
        response = self.client.patch(f'/api/v1/orders/{self.order.id}/status/', {'status': 'shipped'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['error'], 'Access denied')

    def test_seller_update_records_tracking(self):
        self.client.force_authenticate(user=self.item.seller)
        response = self.client.patch(f'/api/v1/orders/{self.order.id}/status/', {'status': 'shipped'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, 'shipped')
        event = OrderTracking.objects.get(order=self.order)
        self.assertEqual(event.description, 'Order has been shipped')

    def test_admin_can_update_any_order(self):
        self.client.force_authenticate(user=AdminFactory())
        response = self.client.patch(f'/api/v1/orders/{self.order.id}/status/', {'status': 'cancelled'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_pending_is_not_a_target_status(self):
        self.client.force_authenticate(user=AdminFactory())
        response = self.client.patch(f'/api/v1/orders/{self.order.id}/status/', {'status': 'pending'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
