from rest_framework import serializers

from .services import TIME_RANGES


class TimeRangeQuerySerializer(serializers.Serializer):
    timeRange = serializers.ChoiceField(choices=list(TIME_RANGES), default='30d')


class LimitQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(min_value=1, max_value=50, required=False)


class SellerStatsSerializer(serializers.Serializer):
    """Seller analytics over a rolling window"""
    stats = serializers.DictField()
    top_products = serializers.ListField()
    trend = serializers.ListField()


class AdminStatsSerializer(serializers.Serializer):
    """Platform-wide analytics for admins"""
    overview = serializers.DictField()
    recent_activity = serializers.DictField()
    top_sellers = serializers.ListField()


class SellerDashboardSerializer(serializers.Serializer):
    """Seller panel home page"""
    stats = serializers.DictField()
    recent_orders = serializers.ListField()
    top_products = serializers.ListField()
    analytics = serializers.DictField()


class TrendSerializer(serializers.Serializer):
    revenue = serializers.ListField()
    orders = serializers.ListField()
    products = serializers.ListField()
