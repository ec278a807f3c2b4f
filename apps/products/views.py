import logging

from django.core.cache import cache
from django.db.models import Count, Q
from django.http import Http404
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import generics, permissions, serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.models import CustomUser
from apps.accounts.permissions import IsAdminPermission, IsSellerPermission
from apps.utils.pagination import StandardPagination
from .models import Category, Product
from .serializers import (
    CategorySerializer,
    ProductApprovalSerializer,
    ProductDetailSerializer,
    ProductListSerializer,
    SellerDetailSerializer,
    SellerProductSerializer,
    TopCategorySerializer,
)

logger = logging.getLogger(__name__)

TOP_CATEGORIES_CACHE_KEY = 'products:top_categories'


class ProductQuerySerializer(serializers.Serializer):
    category = serializers.IntegerField(required=False)
    search = serializers.CharField(required=False, max_length=100)
    sort = serializers.ChoiceField(choices=['name', 'price', 'created_at'], default='created_at')
    order = serializers.ChoiceField(choices=['asc', 'desc'], default='desc')


def active_products():
    return Product.objects.filter(status='active').select_related(
        'category', 'seller', 'seller__seller_profile'
    )


class ProductViewSet(viewsets.ModelViewSet):
    """
    Public catalogue plus seller-side management.

    Anyone can browse active products. Sellers create, update and delete
    their own products, which go back to pending approval on creation.
    Admins approve or deactivate.
    """
    pagination_class = StandardPagination
    lookup_value_regex = r'\d+'
    http_method_names = ['get', 'post', 'put', 'patch', 'delete', 'head', 'options']

    def get_permissions(self):
        if self.action in ('list', 'retrieve', 'top_categories'):
            return [permissions.AllowAny()]
        if self.action == 'approve':
            return [IsAuthenticated(), IsAdminPermission()]
        return [IsAuthenticated(), IsSellerPermission()]

    def get_serializer_class(self):
        if self.action == 'list':
            return ProductListSerializer
        if self.action == 'retrieve':
            return ProductDetailSerializer
        return SellerProductSerializer

    def get_queryset(self):
        if self.action in ('list', 'retrieve'):
            return active_products().prefetch_related('variants')
        if self.action == 'approve':
            return Product.objects.all()
        return Product.objects.filter(seller=self.request.user).select_related('category')

    def get_object(self):
        try:
            return super().get_object()
        except Http404:
            if self.action in ('update', 'partial_update', 'destroy'):
                raise NotFound('Product not found or access denied')
            raise NotFound('Product not found')

    def filter_queryset(self, queryset):
        if self.action != 'list':
            return queryset

        params = ProductQuerySerializer(data=self.request.query_params)
        params.is_valid(raise_exception=True)
        filters = params.validated_data

        if filters.get('category'):
            queryset = queryset.filter(category_id=filters['category'])
        if filters.get('search'):
            search = filters['search']
            queryset = queryset.filter(Q(name__icontains=search) | Q(description__icontains=search))

        prefix = '-' if filters['order'] == 'desc' else ''
        return queryset.order_by(f"{prefix}{filters['sort']}")

    @extend_schema(parameters=[ProductQuerySerializer])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def retrieve(self, request, *args, **kwargs):
        product = self.get_object()
        return Response({'success': True, 'data': self.get_serializer(product).data})

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        sku = serializer.validated_data.get('sku')
        if sku and Product.objects.filter(sku=sku).exists():
            return Response({
                'success': False,
                'error': 'SKU already exists'
            }, status=status.HTTP_400_BAD_REQUEST)

        product = serializer.save(seller=request.user, status='pending_approval')
        logger.info("Seller %s created product %s", request.user.email, product.id)
        return Response({
            'success': True,
            'message': 'Product created successfully. Awaiting approval.',
            'data': self.get_serializer(product).data,
        }, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        product = self.get_object()
        serializer = self.get_serializer(product, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        # Read-only keys such as status are dropped by the serializer
        if not serializer.validated_data:
            return Response({
                'success': False,
                'error': 'No fields to update'
            }, status=status.HTTP_400_BAD_REQUEST)

        sku = serializer.validated_data.get('sku')
        if sku and Product.objects.filter(sku=sku).exclude(pk=product.pk).exists():
            return Response({
                'success': False,
                'error': 'SKU already exists'
            }, status=status.HTTP_400_BAD_REQUEST)

        product = serializer.save()
        return Response({
            'success': True,
            'message': 'Product updated successfully',
            'data': self.get_serializer(product).data,
        })

    def destroy(self, request, *args, **kwargs):
        product = self.get_object()
        product.delete()
        return Response({'success': True, 'message': 'Product deleted successfully'})

    @action(detail=False, methods=['get'], url_path='seller/my-products')
    def my_products(self, request):
        page = self.paginate_queryset(self.get_queryset())
        serializer = self.get_serializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    @extend_schema(request=ProductApprovalSerializer)
    @action(detail=True, methods=['patch'])
    def approve(self, request, pk=None):
        product = self.get_object()
        serializer = ProductApprovalSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        approved = serializer.validated_data['status'] == 'approved'
        product.status = 'active' if approved else 'inactive'
        product.save(update_fields=['status', 'updated_at'])

        return Response({
            'success': True,
            'message': f"Product {'approved' if approved else 'rejected'} successfully",
            'data': SellerProductSerializer(product).data,
        })

    @action(detail=False, methods=['get'], url_path='categories/top')
    def top_categories(self, request):
        categories = cache.get(TOP_CATEGORIES_CACHE_KEY)
        if categories is None:
            queryset = Category.objects.filter(is_active=True).annotate(
                product_count=Count('products', filter=Q(products__status='active'))
            ).filter(product_count__gt=0).order_by('-product_count', 'name')[:8]
            categories = TopCategorySerializer(queryset, many=True).data
            cache.set(TOP_CATEGORIES_CACHE_KEY, categories, 300)
        return Response({'success': True, 'data': categories})


class SellerDetailView(generics.RetrieveAPIView):
    permission_classes = [permissions.AllowAny]
    serializer_class = SellerDetailSerializer

    def get_object(self):
        seller = CustomUser.objects.select_related('seller_profile').filter(
            pk=self.kwargs['seller_id'], role=CustomUser.ROLE_SELLER
        ).first()
        if seller is None:
            raise NotFound('Seller not found')
        return seller

    def retrieve(self, request, *args, **kwargs):
        seller = self.get_object()
        return Response({'success': True, 'data': self.get_serializer(seller).data})


class SellerProductsView(generics.ListAPIView):
    permission_classes = [permissions.AllowAny]
    serializer_class = ProductListSerializer
    pagination_class = StandardPagination

    def get_queryset(self):
        return active_products().filter(seller_id=self.kwargs['seller_id'])


class CategoryViewSet(viewsets.ReadOnlyModelViewSet):
    """Active categories with their active product counts"""
    permission_classes = [permissions.AllowAny]
    serializer_class = CategorySerializer
    pagination_class = None

    def get_queryset(self):
        return Category.objects.filter(is_active=True).annotate(
            products_count=Count('products', filter=Q(products__status='active'))
        ).order_by('name')

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response({'success': True, 'data': serializer.data})

    @extend_schema(parameters=[
        OpenApiParameter('page', int),
        OpenApiParameter('limit', int),
    ])
    def retrieve(self, request, *args, **kwargs):
        category = self.get_object()
        products = active_products().filter(category=category).order_by('-is_featured', '-created_at')

        paginator = StandardPagination()
        page = paginator.paginate_queryset(products, request, view=self)
        response = paginator.get_paginated_response(ProductListSerializer(page, many=True).data)
        response.data['category'] = self.get_serializer(category).data
        return response

    def get_object(self):
        try:
            return super().get_object()
        except Http404:
            raise NotFound('Category not found')
