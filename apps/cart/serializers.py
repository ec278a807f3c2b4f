from django.conf import settings
from rest_framework import serializers

from .models import CartItem


def max_line_quantity():
    return settings.MARKETPLACE_SETTINGS['MAX_CART_LINE_QUANTITY']


class CartItemSerializer(serializers.ModelSerializer):
    product_id = serializers.IntegerField(source='product.id', read_only=True)
    name = serializers.CharField(source='product.name', read_only=True)
    price = serializers.DecimalField(source='product.price', max_digits=10, decimal_places=2, read_only=True)
    images = serializers.JSONField(source='product.images', read_only=True)
    stock_quantity = serializers.IntegerField(source='product.stock_quantity', read_only=True)
    variant_id = serializers.IntegerField(source='variant.id', read_only=True, default=None)
    variant_name = serializers.CharField(source='variant.name', read_only=True, default=None)
    variant_value = serializers.CharField(source='variant.value', read_only=True, default=None)
    price_adjustment = serializers.DecimalField(
        source='variant.price_adjustment', max_digits=10, decimal_places=2, read_only=True, default=None
    )
    unit_price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = CartItem
        fields = [
            'id', 'quantity', 'created_at', 'product_id', 'name', 'price', 'images', 'stock_quantity',
            'variant_id', 'variant_name', 'variant_value', 'price_adjustment', 'unit_price', 'total_price',
        ]


class AddCartItemSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    variant_id = serializers.IntegerField(required=False, allow_null=True)
    quantity = serializers.IntegerField(min_value=1)

    def validate_quantity(self, value):
        if value > max_line_quantity():
            raise serializers.ValidationError(f"Ensure this value is less than or equal to {max_line_quantity()}.")
        return value


class UpdateCartItemSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)

    def validate_quantity(self, value):
        if value > max_line_quantity():
            raise serializers.ValidationError(f"Ensure this value is less than or equal to {max_line_quantity()}.")
        return value
