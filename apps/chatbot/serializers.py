from rest_framework import serializers

from .prompts import SYSTEM_PROMPTS

USER_TYPES = list(SYSTEM_PROMPTS)


class HistoryMessageSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=['user', 'assistant'])
    content = serializers.CharField(trim_whitespace=False)


class ChatRequestSerializer(serializers.Serializer):
    message = serializers.CharField(max_length=4000, error_messages={
        'required': 'Message is required',
        'blank': 'Message is required',
    })
    conversationHistory = HistoryMessageSerializer(many=True, required=False, default=list)
    userType = serializers.ChoiceField(choices=USER_TYPES, default='customer')


class SuggestionQuerySerializer(serializers.Serializer):
    userType = serializers.ChoiceField(choices=USER_TYPES, default='customer')
