import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .prompts import SUGGESTED_QUESTIONS
from .serializers import ChatRequestSerializer, SuggestionQuerySerializer
from .services import ChatbotError, GroqClient

logger = logging.getLogger(__name__)


class ChatView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(request=ChatRequestSerializer)
    def post(self, request):
        serializer = ChatRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            result = GroqClient().chat(data['message'], data['conversationHistory'], data['userType'])
        except ChatbotError as e:
            return Response({
                'success': False,
                'error': str(e)
            }, status=e.status_code)

        return Response({'success': True, **result}, status=status.HTTP_200_OK)


class SuggestionsView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(parameters=[SuggestionQuerySerializer])
    def get(self, request):
        params = SuggestionQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        return Response({
            'success': True,
            'suggestions': SUGGESTED_QUESTIONS[params.validated_data['userType']],
        })


class ConversationView(APIView):
    permission_classes = [IsAuthenticated]

    def delete(self, request):
        # History lives on the client, nothing is stored server side
        return Response({'success': True, 'message': 'Conversation cleared'})
