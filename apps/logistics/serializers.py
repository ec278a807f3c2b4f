from rest_framework import serializers

from .models import OrderTracking


class OrderTrackingSerializer(serializers.ModelSerializer):
    created_by_email = serializers.EmailField(source='created_by.email', read_only=True, default=None)

    class Meta:
        model = OrderTracking
        fields = ['id', 'order_id', 'status', 'description', 'location', 'created_by_email', 'created_at']


class TrackingUpdateSerializer(serializers.Serializer):
    status = serializers.CharField(required=False, allow_blank=True, max_length=30)
    description = serializers.CharField(required=False, allow_blank=True)
    location = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)


class GenerateTrackingSerializer(serializers.Serializer):
    carrier = serializers.CharField(required=False, allow_blank=True, max_length=50)


class ShipmentSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    order_number = serializers.CharField()
    tracking_number = serializers.CharField()
    carrier = serializers.CharField(allow_null=True)
    status = serializers.CharField()
    shipping_address = serializers.JSONField()
    customer_name = serializers.SerializerMethodField()
    customer_email = serializers.EmailField(source='customer.email', default=None)
    items_count = serializers.IntegerField()
    total_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()

    def get_customer_name(self, obj):
        return obj.customer.full_name if obj.customer else None
