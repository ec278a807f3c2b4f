from django.core.cache import cache
from drf_spectacular.utils import extend_schema
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.permissions import IsAdminPermission, IsSellerPermission
from .serializers import (
    AdminStatsSerializer,
    LimitQuerySerializer,
    SellerDashboardSerializer,
    SellerStatsSerializer,
    TimeRangeQuerySerializer,
    TrendSerializer,
)
from .services import AdminAnalyticsService, SellerAnalyticsService, SellerDashboardService

ADMIN_STATS_CACHE_KEY = 'dashboard:admin_stats'


def read_limit(request, default):
    params = LimitQuerySerializer(data=request.query_params)
    params.is_valid(raise_exception=True)
    return params.validated_data.get('limit', default)


# ==================== ANALYTICS ====================

@extend_schema(
    parameters=[TimeRangeQuerySerializer],
    responses=SellerStatsSerializer,
    description='Seller sales figures for the last 7d, 30d, 90d or 1y',
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsSellerPermission])
def seller_stats(request):
    params = TimeRangeQuerySerializer(data=request.query_params)
    params.is_valid(raise_exception=True)

    analytics = SellerAnalyticsService(request.user, params.validated_data['timeRange'])
    return Response({
        'success': True,
        'data': {
            'stats': analytics.stats(),
            'top_products': analytics.top_products(),
            'trend': analytics.trend(),
        },
    })


@extend_schema(responses=AdminStatsSerializer, description='Platform overview, last 24h activity and top sellers')
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminPermission])
def admin_stats(request):
    data = cache.get(ADMIN_STATS_CACHE_KEY)
    if data is None:
        data = {
            'overview': AdminAnalyticsService.overview(),
            'recent_activity': AdminAnalyticsService.recent_activity(),
            'top_sellers': AdminAnalyticsService.top_sellers(),
        }
        cache.set(ADMIN_STATS_CACHE_KEY, data, 300)
    return Response({'success': True, 'data': data})


# ==================== SELLER DASHBOARD ====================

@extend_schema(responses=SellerDashboardSerializer, description='Seller dashboard with stats, recent orders, top products and analytics')
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsSellerPermission])
def seller_dashboard(request):
    return Response({'success': True, 'data': SellerDashboardService(request.user).dashboard()})


@extend_schema(parameters=[LimitQuerySerializer])
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsSellerPermission])
def seller_recent_orders(request):
    limit = read_limit(request, 10)
    return Response({'success': True, 'data': SellerDashboardService(request.user).recent_orders(limit)})


@extend_schema(parameters=[LimitQuerySerializer])
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsSellerPermission])
def seller_top_products(request):
    limit = read_limit(request, 10)
    return Response({'success': True, 'data': SellerDashboardService(request.user).top_products(limit)})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsSellerPermission])
def seller_analytics(request):
    return Response({'success': True, 'data': SellerDashboardService(request.user).analytics()})


@extend_schema(responses=TrendSerializer, description='Revenue, orders and new products for the last six months')
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsSellerPermission])
def seller_trends(request):
    return Response({'success': True, 'data': SellerDashboardService(request.user).trends()})
