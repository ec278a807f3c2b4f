import logging

from django.db import DatabaseError
from django.db.models import Count
from django.utils import timezone
from drf_spectacular.utils import extend_schema
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.models import CustomUser
from apps.accounts.permissions import IsAdminPermission
from apps.orders.models import Order
from apps.products.models import Product
from apps.sellers.models import SellerProfile
from apps.support.models import CustomerFeedback
from apps.support.serializers import FeedbackRespondSerializer, FeedbackSerializer, FeedbackStatusSerializer
from apps.products.serializers import ProductApprovalSerializer
from apps.utils.pagination import StandardPagination
from .serializers import (
    AdminOrderSerializer,
    AdminProductSerializer,
    AdminSellerSerializer,
    AdminUserSerializer,
    FeedbackListQuerySerializer,
    MockSellerSerializer,
    PageQuerySerializer,
    PendingSellerSerializer,
    ProductListQuerySerializer,
    SellerApprovalSerializer,
    UserListQuerySerializer,
)
from .services import MockDirectory, feedback_stats, mock_page

logger = logging.getLogger(__name__)


class AdminAPIView(APIView):
    permission_classes = [IsAuthenticated, IsAdminPermission]


def validated_query(serializer_class, request):
    params = serializer_class(data=request.query_params)
    params.is_valid(raise_exception=True)
    return params.validated_data


# ==================== USERS & SELLERS ====================

class UserListView(AdminAPIView):
    """
    Every account, newest first, optionally filtered by ?role=.
    Reads from the mock user store when the database is unreachable.
    """

    @extend_schema(parameters=[UserListQuerySerializer], responses=AdminUserSerializer(many=True))
    def get(self, request):
        query = validated_query(UserListQuerySerializer, request)
        role = query.get('role')

        queryset = CustomUser.objects.select_related('seller_profile').order_by('-created_at')
        if role:
            queryset = queryset.filter(role=role)

        paginator = StandardPagination()
        try:
            page = paginator.paginate_queryset(queryset, request, view=self)
            data = AdminUserSerializer(page, many=True).data
        except DatabaseError as e:
            logger.warning("User list falling back to mock store: %s", e)
            users, pagination = mock_page(MockDirectory().users(role), query['page'], query['limit'])
            return Response({'success': True, 'data': users, 'pagination': pagination, 'mock': True})
        return paginator.get_paginated_response(data)


class SellerListView(AdminAPIView):

    @extend_schema(parameters=[PageQuerySerializer], responses=AdminSellerSerializer(many=True))
    def get(self, request):
        query = validated_query(PageQuerySerializer, request)
        queryset = CustomUser.objects.filter(role=CustomUser.ROLE_SELLER).select_related(
            'seller_profile'
        ).order_by('-created_at')

        paginator = StandardPagination()
        try:
            page = paginator.paginate_queryset(queryset, request, view=self)
            data = AdminSellerSerializer(page, many=True).data
        except DatabaseError as e:
            logger.warning("Seller list falling back to mock store: %s", e)
            sellers, pagination = mock_page(MockDirectory().sellers(), query['page'], query['limit'])
            return Response({'success': True, 'data': sellers, 'pagination': pagination, 'mock': True})
        return paginator.get_paginated_response(data)


class PendingSellerListView(AdminAPIView):

    @extend_schema(responses=PendingSellerSerializer(many=True))
    def get(self, request):
        sellers = CustomUser.objects.filter(
            role=CustomUser.ROLE_SELLER, seller_profile__is_approved=False
        ).select_related('seller_profile').order_by('created_at')
        return Response({'success': True, 'data': PendingSellerSerializer(sellers, many=True).data})


class SellerApprovalView(AdminAPIView):

    @extend_schema(request=SellerApprovalSerializer)
    def patch(self, request, seller_id):
        serializer = SellerApprovalSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        approved = serializer.validated_data['is_approved']

        profile = SellerProfile.objects.filter(user_id=seller_id).first()
        if profile is None:
            return Response({
                'success': False,
                'error': 'Seller not found'
            }, status=status.HTTP_404_NOT_FOUND)

        profile.is_approved = approved
        profile.approval_date = timezone.now()
        profile.save(update_fields=['is_approved', 'approval_date', 'updated_at'])
        logger.info("Admin %s %s seller %s", request.user.email, 'approved' if approved else 'rejected', seller_id)

        return Response({
            'success': True,
            'message': f"Seller {'approved' if approved else 'rejected'} successfully",
            'data': {
                'user_id': profile.user_id,
                'company_name': profile.company_name,
                'is_approved': profile.is_approved,
                'approval_date': profile.approval_date,
            },
        })


class ToggleUserStatusView(AdminAPIView):

    def patch(self, request, user_id):
        user = CustomUser.objects.filter(pk=user_id).first()
        if user is None:
            return Response({
                'success': False,
                'error': 'User not found'
            }, status=status.HTTP_404_NOT_FOUND)

        user.is_active = not user.is_active
        user.save(update_fields=['is_active', 'updated_at'])
        logger.info("Admin %s set %s active=%s", request.user.email, user.email, user.is_active)

        return Response({
            'success': True,
            'message': f"User {'activated' if user.is_active else 'deactivated'} successfully",
            'data': AdminUserSerializer(user).data,
        })


class MockSellerCreateView(AdminAPIView):

    @extend_schema(request=MockSellerSerializer)
    def post(self, request):
        serializer = MockSellerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        user = MockDirectory().create_seller(
            data['email'], data['password'], data['name'], data['storeName'], data.get('phone')
        )
        return Response({
            'success': True,
            'message': 'Mock seller created',
            'user': user,
        }, status=status.HTTP_201_CREATED)


# ==================== CATALOGUE & ORDERS ====================

class AdminProductListView(generics.ListAPIView):
    """Products awaiting review by default, oldest first"""
    permission_classes = [IsAuthenticated, IsAdminPermission]
    serializer_class = AdminProductSerializer
    pagination_class = StandardPagination

    def get_queryset(self):
        query = validated_query(ProductListQuerySerializer, self.request)
        return Product.objects.filter(status=query['status']).select_related(
            'category', 'seller', 'seller__seller_profile'
        ).order_by('created_at')

    @extend_schema(parameters=[ProductListQuerySerializer])
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class ProductApprovalView(AdminAPIView):

    @extend_schema(request=ProductApprovalSerializer)
    def patch(self, request, product_id):
        serializer = ProductApprovalSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = Product.objects.filter(pk=product_id).first()
        if product is None:
            return Response({
                'success': False,
                'error': 'Product not found'
            }, status=status.HTTP_404_NOT_FOUND)

        approved = serializer.validated_data['status'] == 'approved'
        product.status = 'active' if approved else 'rejected'
        product.save(update_fields=['status', 'updated_at'])

        return Response({
            'success': True,
            'message': f"Product {'approved' if approved else 'rejected'} successfully",
            'data': AdminProductSerializer(product).data,
        })


class AdminOrderListView(generics.ListAPIView):
    permission_classes = [IsAuthenticated, IsAdminPermission]
    serializer_class = AdminOrderSerializer
    pagination_class = StandardPagination

    def get_queryset(self):
        queryset = Order.objects.select_related('customer').annotate(
            items_count=Count('items')
        ).order_by('-created_at')
        order_status = self.request.query_params.get('status')
        if order_status:
            queryset = queryset.filter(status=order_status)
        return queryset


# ==================== FEEDBACK ====================

class FeedbackListView(generics.ListAPIView):
    permission_classes = [IsAuthenticated, IsAdminPermission]
    serializer_class = FeedbackSerializer
    pagination_class = StandardPagination

    def get_queryset(self):
        query = validated_query(FeedbackListQuerySerializer, self.request)
        queryset = CustomerFeedback.objects.select_related('customer', 'responded_by')
        if query.get('status'):
            queryset = queryset.filter(status=query['status'])
        if query.get('type'):
            queryset = queryset.filter(feedback_type=query['type'])
        return queryset.order_by('-created_at')

    @extend_schema(parameters=[FeedbackListQuerySerializer])
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class FeedbackStatsView(AdminAPIView):

    def get(self, request):
        return Response({'success': True, 'data': feedback_stats()})


class FeedbackView(AdminAPIView):

    def get_feedback(self, feedback_id):
        return CustomerFeedback.objects.select_related('customer', 'responded_by').filter(pk=feedback_id).first()

    def feedback_not_found(self):
        return Response({
            'success': False,
            'error': 'Feedback not found'
        }, status=status.HTTP_404_NOT_FOUND)


class FeedbackDetailView(FeedbackView):

    @extend_schema(request=FeedbackStatusSerializer, responses=FeedbackSerializer)
    def patch(self, request, feedback_id):
        feedback = self.get_feedback(feedback_id)
        if feedback is None:
            return self.feedback_not_found()

        serializer = FeedbackStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        feedback.status = serializer.validated_data['status']
        admin_response = serializer.validated_data.get('admin_response')
        if admin_response:
            feedback.admin_response = admin_response
            feedback.responded_by = request.user
            feedback.responded_at = timezone.now()
        feedback.save()

        return Response({
            'success': True,
            'message': 'Feedback updated successfully',
            'data': FeedbackSerializer(feedback).data,
        })


class FeedbackRespondView(FeedbackView):

    @extend_schema(request=FeedbackRespondSerializer, responses=FeedbackSerializer)
    def post(self, request, feedback_id):
        feedback = self.get_feedback(feedback_id)
        if feedback is None:
            return self.feedback_not_found()

        serializer = FeedbackRespondSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        feedback.admin_response = serializer.validated_data['response']
        feedback.status = 'responded'
        feedback.responded_by = request.user
        feedback.responded_at = timezone.now()
        feedback.save()
        logger.info("Admin %s responded to feedback %s", request.user.email, feedback.id)

        return Response({
            'success': True,
            'message': 'Response sent successfully',
            'data': FeedbackSerializer(feedback).data,
        })
