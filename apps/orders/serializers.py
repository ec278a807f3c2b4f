from rest_framework import serializers

from .models import Order, OrderItem

UPDATABLE_STATUSES = ['confirmed', 'processing', 'shipped', 'delivered', 'cancelled']


class OrderItemInputSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    variant_id = serializers.IntegerField(required=False, allow_null=True)
    quantity = serializers.IntegerField(min_value=1)


class AddressInputSerializer(serializers.Serializer):
    full_name = serializers.CharField(required=False, allow_blank=True)
    phone = serializers.CharField(required=False, allow_blank=True)
    street_address = serializers.CharField()
    city = serializers.CharField()
    state = serializers.CharField()
    postal_code = serializers.CharField()
    country = serializers.CharField(required=False, default='India')


class CreateOrderSerializer(serializers.Serializer):
    """Without items the order is placed from the customer's cart"""
    items = OrderItemInputSerializer(many=True, required=False)
    shipping_address = AddressInputSerializer()
    billing_address = AddressInputSerializer(required=False, allow_null=True)
    payment_method = serializers.ChoiceField(choices=Order.PAYMENT_METHOD_CHOICES)
    notes = serializers.CharField(required=False, allow_blank=True, max_length=2000)


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=UPDATABLE_STATUSES)


class OrderItemSerializer(serializers.ModelSerializer):
    images = serializers.SerializerMethodField()

    class Meta:
        model = OrderItem
        fields = [
            'id', 'product_id', 'variant_id', 'seller_id', 'product_name', 'product_sku',
            'quantity', 'unit_price', 'total_price', 'images',
        ]

    def get_images(self, obj):
        return obj.product.images if obj.product else []


class OrderListSerializer(serializers.ModelSerializer):
    items_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'order_number', 'status', 'payment_status', 'payment_method', 'subtotal',
            'tax_amount', 'shipping_amount', 'discount_amount', 'total_amount', 'currency',
            'tracking_number', 'carrier', 'items_count', 'created_at', 'updated_at',
        ]


class OrderDetailSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    customer_name = serializers.SerializerMethodField()
    customer_email = serializers.EmailField(source='customer.email', read_only=True, default=None)

    class Meta:
        model = Order
        fields = [
            'id', 'order_number', 'customer_id', 'customer_name', 'customer_email', 'status',
            'payment_status', 'payment_method', 'currency', 'subtotal', 'tax_amount',
            'shipping_amount', 'discount_amount', 'total_amount', 'shipping_address',
            'billing_address', 'notes', 'tracking_number', 'carrier', 'items',
            'created_at', 'updated_at',
        ]

    def get_customer_name(self, obj):
        return obj.customer.full_name if obj.customer else None


class SellerOrderSerializer(serializers.ModelSerializer):
    first_name = serializers.CharField(source='customer.first_name', read_only=True, default=None)
    last_name = serializers.CharField(source='customer.last_name', read_only=True, default=None)
    email = serializers.EmailField(source='customer.email', read_only=True, default=None)
    my_items_count = serializers.IntegerField(read_only=True)
    my_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'order_number', 'status', 'total_amount', 'created_at',
            'first_name', 'last_name', 'email', 'my_items_count', 'my_total',
        ]
