import logging

from django.db.models import Count
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.permissions import IsAdminPermission, IsSellerOrAdminPermission, IsSellerPermission
from apps.orders.models import Order
from apps.orders.serializers import OrderDetailSerializer
from .serializers import (
    GenerateTrackingSerializer,
    OrderTrackingSerializer,
    ShipmentSerializer,
    TrackingUpdateSerializer,
)
from .services import SellerLogisticsService, TrackingService

logger = logging.getLogger(__name__)


def get_accessible_order(user, order_id):
    """
    The customer who placed the order, any admin, or a seller with items in it.
    Returns None for everyone else.
    """
    order = Order.objects.select_related('customer').filter(pk=order_id).first()
    if order is None:
        return None
    if user.is_admin:
        return order
    if user.is_seller:
        return order if order.has_seller(user) else None
    return order if order.customer_id == user.id else None


def order_not_found():
    return Response({
        'success': False,
        'error': 'Order not found or access denied'
    }, status=status.HTTP_404_NOT_FOUND)


class ShipmentListView(APIView):
    permission_classes = [IsAuthenticated, IsAdminPermission]

    @extend_schema(responses=ShipmentSerializer(many=True))
    def get(self, request):
        orders = Order.objects.filter(tracking_number__isnull=False).select_related('customer').annotate(
            items_count=Count('items')
        ).order_by('-created_at')
        return Response({'success': True, 'data': ShipmentSerializer(orders, many=True).data})


class OrderTrackingView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, order_id):
        order = get_accessible_order(request.user, order_id)
        if order is None:
            return order_not_found()

        return Response({
            'success': True,
            'data': {
                'order': OrderDetailSerializer(order).data,
                'tracking_history': OrderTrackingSerializer(order.tracking_events.all(), many=True).data,
            },
        })

    @extend_schema(request=TrackingUpdateSerializer)
    def post(self, request, order_id):
        if not IsSellerOrAdminPermission().has_permission(request, self):
            return Response({
                'success': False,
                'error': 'Insufficient permissions'
            }, status=status.HTTP_403_FORBIDDEN)

        serializer = TrackingUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        if not data.get('status') or not data.get('description'):
            return Response({
                'success': False,
                'error': 'Status and description are required'
            }, status=status.HTTP_400_BAD_REQUEST)

        order = get_accessible_order(request.user, order_id)
        if order is None:
            return order_not_found()

        event = TrackingService.add_event(
            order, data['status'], data['description'], data.get('location'), user=request.user
        )
        return Response({
            'success': True,
            'message': 'Tracking updated successfully',
            'data': OrderTrackingSerializer(event).data,
        })


class GenerateTrackingView(APIView):
    permission_classes = [IsAuthenticated, IsSellerOrAdminPermission]

    @extend_schema(request=GenerateTrackingSerializer)
    def post(self, request, order_id):
        serializer = GenerateTrackingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = get_accessible_order(request.user, order_id)
        if order is None:
            return order_not_found()

        order = TrackingService.assign_tracking_number(
            order, serializer.validated_data.get('carrier'), user=request.user
        )
        return Response({
            'success': True,
            'message': 'Tracking number generated successfully',
            'tracking_number': order.tracking_number,
            'carrier': order.carrier,
        })


class LogisticsStatsView(APIView):
    permission_classes = [IsAuthenticated, IsAdminPermission]

    def get(self, request):
        return Response({'success': True, 'data': TrackingService.stats()})


class SellerLogisticsOverviewView(APIView):
    permission_classes = [IsAuthenticated, IsSellerPermission]

    def get(self, request):
        return Response({'success': True, 'data': SellerLogisticsService(request.user).overview()})


class SellerShipmentsView(APIView):
    permission_classes = [IsAuthenticated, IsSellerPermission]

    def get(self, request):
        shipments = SellerLogisticsService(request.user).shipments()
        return Response({'success': True, 'data': shipments, 'total': len(shipments)})


class SellerReturnsView(APIView):
    permission_classes = [IsAuthenticated, IsSellerPermission]

    def get(self, request):
        return Response({'success': True, 'data': SellerLogisticsService(request.user).reverse_logistics()})
