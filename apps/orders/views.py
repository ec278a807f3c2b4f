import logging

from django.db.models import Count, Q, Sum
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.permissions import IsCustomerPermission, IsSellerPermission
from apps.utils.pagination import OrderPagination
from .models import Order
from .serializers import (
    CreateOrderSerializer,
    OrderDetailSerializer,
    OrderListSerializer,
    OrderStatusSerializer,
    SellerOrderSerializer,
)
from .services import OrderError, OrderService

logger = logging.getLogger(__name__)


class OrderViewSet(viewsets.GenericViewSet):
    """
    Orders for every role.
    - customers place orders and list their own
    - sellers see orders that contain their items
    - admins see and update everything
    """
    pagination_class = OrderPagination
    lookup_value_regex = r'\d+'

    def get_permissions(self):
        if self.action in ('create', 'my_orders'):
            return [IsAuthenticated(), IsCustomerPermission()]
        if self.action == 'seller_orders':
            return [IsAuthenticated(), IsSellerPermission()]
        return [IsAuthenticated()]

    def get_serializer_class(self):
        if self.action == 'create':
            return CreateOrderSerializer
        if self.action == 'my_orders':
            return OrderListSerializer
        if self.action == 'seller_orders':
            return SellerOrderSerializer
        if self.action == 'update_status':
            return OrderStatusSerializer
        return OrderDetailSerializer

    def get_queryset(self):
        user = self.request.user
        queryset = Order.objects.select_related('customer')
        if user.is_admin:
            return queryset
        if user.is_seller:
            return queryset.filter(items__seller=user).distinct()
        return queryset.filter(customer=user)

    def _not_found(self):
        return Response({
            'success': False,
            'error': 'Order not found'
        }, status=status.HTTP_404_NOT_FOUND)

    def create(self, request):
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            order = OrderService.create(
                customer=request.user,
                items=data.get('items'),
                shipping_address=data['shipping_address'],
                billing_address=data.get('billing_address'),
                payment_method=data['payment_method'],
                notes=data.get('notes', ''),
            )
        except OrderError as e:
            return Response({
                'success': False,
                'error': str(e),
                **e.extra,
            }, status=e.status_code)

        return Response({
            'success': True,
            'message': 'Order created successfully',
            'data': OrderDetailSerializer(order).data,
        }, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        order = self.get_queryset().prefetch_related('items__product').filter(pk=pk).first()
        if order is None:
            return self._not_found()
        return Response({'success': True, 'data': OrderDetailSerializer(order).data})

    @action(detail=False, methods=['get'], url_path='my-orders')
    def my_orders(self, request):
        orders = Order.objects.filter(customer=request.user).annotate(items_count=Count('items'))
        page = self.paginate_queryset(orders)
        return self.get_paginated_response(OrderListSerializer(page, many=True).data)

    @extend_schema(request=OrderStatusSerializer)
    @action(detail=True, methods=['patch'], url_path='status')
    def update_status(self, request, pk=None):
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = request.user
        if not (user.is_seller or user.is_admin):
            return Response({
                'success': False,
                'error': 'Insufficient permissions'
            }, status=status.HTTP_403_FORBIDDEN)

        order = Order.objects.filter(pk=pk).first()
        if order is None:
            return self._not_found()
        if user.is_seller and not order.has_seller(user):
            return Response({
                'success': False,
                'error': 'Access denied'
            }, status=status.HTTP_403_FORBIDDEN)

        order = OrderService.update_status(order, serializer.validated_data['status'])
        logger.info("Order %s moved to %s by %s", order.order_number, order.status, user.email)
        return Response({
            'success': True,
            'message': 'Order status updated successfully',
            'data': OrderDetailSerializer(order).data,
        })

    @action(detail=False, methods=['get'], url_path='seller/my-orders')
    def seller_orders(self, request):
        mine = Q(items__seller=request.user)
        orders = Order.objects.filter(mine).select_related('customer').annotate(
            my_items_count=Count('items', filter=mine),
            my_total=Sum('items__total_price', filter=mine),
        ).order_by('-created_at')
        page = self.paginate_queryset(orders)
        return self.get_paginated_response(SellerOrderSerializer(page, many=True).data)
