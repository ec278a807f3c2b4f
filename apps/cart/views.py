import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.permissions import IsCustomerPermission
from .models import CartItem
from .serializers import AddCartItemSerializer, CartItemSerializer, UpdateCartItemSerializer
from .services import CartError, CartService

logger = logging.getLogger(__name__)


def cart_error_response(error):
    return Response({
        'success': False,
        'error': str(error),
        **error.extra,
    }, status=error.status_code)


class CartView(APIView):
    permission_classes = [IsAuthenticated, IsCustomerPermission]

    def get(self, request):
        items = list(CartService.active_items(request.user))
        return Response({
            'success': True,
            'data': {
                'items': CartItemSerializer(items, many=True).data,
                'summary': CartService.summary(items),
            },
        })

    def delete(self, request):
        deleted, _ = CartItem.objects.filter(user=request.user).delete()
        logger.info("Cleared %s cart lines for %s", deleted, request.user.email)
        return Response({'success': True, 'message': 'Cart cleared successfully'})


class CartItemCreateView(APIView):
    permission_classes = [IsAuthenticated, IsCustomerPermission]

    @extend_schema(request=AddCartItemSerializer, responses={201: CartItemSerializer})
    def post(self, request):
        serializer = AddCartItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            item, created = CartService.add_item(
                request.user, data['product_id'], data['quantity'], data.get('variant_id')
            )
        except CartError as e:
            return cart_error_response(e)

        return Response({
            'success': True,
            'message': 'Item added to cart successfully' if created else 'Cart item updated successfully',
            'data': CartItemSerializer(item).data,
        }, status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)


class CartItemDetailView(APIView):
    permission_classes = [IsAuthenticated, IsCustomerPermission]

    def get_item(self, request, pk):
        return CartItem.objects.select_related('product', 'variant').filter(pk=pk, user=request.user).first()

    @extend_schema(request=UpdateCartItemSerializer, responses=CartItemSerializer)
    def put(self, request, pk):
        serializer = UpdateCartItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = self.get_item(request, pk)
        if item is None:
            return Response({
                'success': False,
                'error': 'Cart item not found'
            }, status=status.HTTP_404_NOT_FOUND)

        try:
            item = CartService.update_quantity(item, serializer.validated_data['quantity'])
        except CartError as e:
            return cart_error_response(e)

        return Response({
            'success': True,
            'message': 'Cart item updated successfully',
            'data': CartItemSerializer(item).data,
        })

    def delete(self, request, pk):
        item = self.get_item(request, pk)
        if item is None:
            return Response({
                'success': False,
                'error': 'Cart item not found'
            }, status=status.HTTP_404_NOT_FOUND)

        item.delete()
        return Response({'success': True, 'message': 'Item removed from cart successfully'})
