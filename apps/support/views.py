import logging

from django.db import transaction
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.authentication import OptionalJWTAuthentication
from apps.accounts.permissions import IsAdminPermission
from apps.accounts.throttles import AuthRateThrottle
from apps.notifications.tasks import enqueue, send_feedback_alert_task
from apps.utils.pagination import StandardPagination
from .models import SupportTicket
from .serializers import FeedbackSubmitSerializer, SupportTicketSerializer, TicketStatusSerializer

logger = logging.getLogger(__name__)


class FeedbackSubmitView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = [OptionalJWTAuthentication]
    throttle_classes = [AuthRateThrottle]

    @extend_schema(request=FeedbackSubmitSerializer, responses={201: FeedbackSubmitSerializer})
    def post(self, request):
        serializer = FeedbackSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        extra = {}
        user = request.user
        if user.is_authenticated:
            extra = {'customer': user, 'name': user.full_name, 'email': user.email}
        else:
            extra = {
                'name': serializer.validated_data.get('name') or 'Anonymous',
                'email': serializer.validated_data.get('email') or 'anonymous@example.com',
            }

        feedback = serializer.save(**extra)
        transaction.on_commit(lambda: enqueue(send_feedback_alert_task, feedback.id))
        logger.info("Feedback %s received (%s)", feedback.id, feedback.feedback_type)

        return Response({
            'success': True,
            'message': 'Feedback submitted successfully. Thank you for your input!',
            'feedback': {
                'id': feedback.id,
                'type': feedback.feedback_type,
                'rating': feedback.rating,
                'created_at': feedback.created_at,
            },
        }, status=status.HTTP_201_CREATED)


class SupportTicketViewSet(mixins.CreateModelMixin,
                           mixins.ListModelMixin,
                           mixins.RetrieveModelMixin,
                           viewsets.GenericViewSet):
    """
    Users open and follow their own tickets. Admins see every ticket and
    move it through its statuses.
    """
    serializer_class = SupportTicketSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = StandardPagination

    def get_queryset(self):
        queryset = SupportTicket.objects.select_related('user')
        if self.request.user.is_admin:
            ticket_status = self.request.query_params.get('status')
            return queryset.filter(status=ticket_status) if ticket_status else queryset
        return queryset.filter(user=self.request.user)

    def perform_create(self, serializer):
        serializer.save(user=self.request.user)

    @extend_schema(request=TicketStatusSerializer)
    @action(detail=True, methods=['patch'], url_path='status',
            permission_classes=[IsAuthenticated, IsAdminPermission])
    def update_status(self, request, pk=None):
        ticket = self.get_object()
        serializer = TicketStatusSerializer(ticket, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({
            'success': True,
            'message': 'Ticket updated successfully',
            'data': SupportTicketSerializer(ticket).data,
        })
