from rest_framework import serializers

from .services import SEGMENTS


class DateRangeQuerySerializer(serializers.Serializer):
    startDate = serializers.DateField(required=False)
    endDate = serializers.DateField(required=False)

    def validate(self, data):
        start, end = data.get('startDate'), data.get('endDate')
        if start and end and start > end:
            raise serializers.ValidationError("startDate must be before endDate")
        return data


class CustomerListQuerySerializer(DateRangeQuerySerializer):
    search = serializers.CharField(required=False, allow_blank=True, max_length=100)
    segment = serializers.ChoiceField(choices=SEGMENTS, required=False)
    page = serializers.IntegerField(min_value=1, default=1)
    limit = serializers.IntegerField(min_value=1, max_value=100, default=50)


class CustomerOverviewSerializer(serializers.Serializer):
    total_customers = serializers.IntegerField()
    new_customers_this_month = serializers.IntegerField()
    returning_customers = serializers.IntegerField()
    repeat_purchase_rate = serializers.FloatField()
    average_order_value = serializers.FloatField()
    customer_lifetime_value = serializers.FloatField()


class CustomerRowSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    email = serializers.EmailField()
    phone = serializers.CharField()
    total_orders = serializers.IntegerField()
    total_spent = serializers.FloatField()
    last_order_date = serializers.DateTimeField(allow_null=True)
    customer_type = serializers.CharField()
    customer_segment = serializers.CharField()


class CustomerInsightsSerializer(serializers.Serializer):
    next_purchase_prediction = serializers.CharField()
    suggested_discount = serializers.CharField(allow_null=True)
    churn_risk = serializers.CharField()
    order_frequency = serializers.CharField(required=False)
    days_since_last_order = serializers.IntegerField(required=False)
