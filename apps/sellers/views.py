import logging

from django.db.models import Count, Q
from drf_spectacular.utils import extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.permissions import IsAdminPermission
from apps.accounts.throttles import AuthRateThrottle
from apps.products.models import Category
from apps.utils.pagination import StandardPagination
from .models import SellerApplication
from .serializers import (
    ApproveApplicationSerializer,
    RejectApplicationSerializer,
    SellerApplicationCreateSerializer,
    SellerApplicationSerializer,
)
from .services import ApplicationError, SellerApplicationService

logger = logging.getLogger(__name__)


class SellerApplicationSubmitView(APIView):
    permission_classes = [permissions.AllowAny]
    throttle_classes = [AuthRateThrottle]

    @extend_schema(request=SellerApplicationCreateSerializer, responses={201: SellerApplicationCreateSerializer})
    def post(self, request):
        serializer = SellerApplicationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            SellerApplicationService.ensure_can_apply(serializer.validated_data['email'])
        except ApplicationError as e:
            return Response({
                'success': False,
                'error': str(e)
            }, status=status.HTTP_400_BAD_REQUEST)

        application = serializer.save()
        logger.info("Seller application submitted by %s", application.email)
        return Response({
            'success': True,
            'message': 'Seller application submitted successfully. You will be notified once reviewed.',
            'application': SellerApplicationSerializer(application).data,
        }, status=status.HTTP_201_CREATED)


class SellerApplicationViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Admin review of seller applications.
    - list/retrieve with optional ?status= filter
    - approve creates the seller account, reject records a reason
    """
    serializer_class = SellerApplicationSerializer
    permission_classes = [IsAuthenticated, IsAdminPermission]
    pagination_class = StandardPagination

    def get_queryset(self):
        queryset = SellerApplication.objects.select_related('reviewed_by')
        application_status = self.request.query_params.get('status')
        if application_status:
            queryset = queryset.filter(status=application_status)
        return queryset

    @extend_schema(request=ApproveApplicationSerializer)
    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        application = self.get_object()
        serializer = ApproveApplicationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        category = None
        category_id = serializer.validated_data.get('category_id')
        if category_id:
            category = Category.objects.filter(pk=category_id).first()
            if category is None:
                return Response({
                    'success': False,
                    'error': 'Category not found'
                }, status=status.HTTP_400_BAD_REQUEST)

        try:
            application = SellerApplicationService.approve(application, request.user, category)
        except ApplicationError as e:
            return Response({
                'success': False,
                'error': str(e)
            }, status=status.HTTP_400_BAD_REQUEST)

        return Response({
            'success': True,
            'message': 'Seller application approved successfully',
            'application': SellerApplicationSerializer(application).data,
        }, status=status.HTTP_200_OK)

    @extend_schema(request=RejectApplicationSerializer)
    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        application = self.get_object()
        serializer = RejectApplicationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            application = SellerApplicationService.reject(
                application, request.user, serializer.validated_data['reason']
            )
        except ApplicationError as e:
            return Response({
                'success': False,
                'error': str(e)
            }, status=status.HTTP_400_BAD_REQUEST)

        return Response({
            'success': True,
            'message': 'Seller application rejected',
            'application': SellerApplicationSerializer(application).data,
        }, status=status.HTTP_200_OK)

    @action(detail=False, methods=['get'], url_path='stats/overview')
    def stats(self, request):
        counts = SellerApplication.objects.aggregate(
            pending=Count('id', filter=Q(status='pending')),
            approved=Count('id', filter=Q(status='approved')),
            rejected=Count('id', filter=Q(status='rejected')),
            total=Count('id'),
        )
        return Response({'success': True, 'data': counts}, status=status.HTTP_200_OK)
