from rest_framework import serializers

from .models import CustomerFeedback, SupportTicket


class FeedbackSubmitSerializer(serializers.ModelSerializer):
    type = serializers.ChoiceField(source='feedback_type', choices=CustomerFeedback.TYPE_CHOICES, default='general')
    rating = serializers.IntegerField(min_value=1, max_value=5, required=False, allow_null=True)
    message = serializers.CharField(trim_whitespace=True)
    name = serializers.CharField(required=False, allow_blank=True, max_length=200)
    email = serializers.EmailField(required=False, allow_blank=True)

    class Meta:
        model = CustomerFeedback
        fields = ['id', 'type', 'rating', 'message', 'name', 'email', 'created_at']
        read_only_fields = ['id', 'created_at']


class FeedbackSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source='feedback_type', read_only=True)
    customer_full_name = serializers.CharField(source='customer.full_name', read_only=True, default=None)
    responded_by_email = serializers.EmailField(source='responded_by.email', read_only=True, default=None)

    class Meta:
        model = CustomerFeedback
        fields = [
            'id', 'customer_id', 'customer_full_name', 'name', 'email', 'type', 'rating', 'message',
            'status', 'admin_response', 'responded_by_email', 'responded_at', 'created_at', 'updated_at',
        ]


class FeedbackStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=CustomerFeedback.STATUS_CHOICES)
    admin_response = serializers.CharField(required=False, allow_blank=True)


class FeedbackRespondSerializer(serializers.Serializer):
    response = serializers.CharField(trim_whitespace=True)


class SupportTicketSerializer(serializers.ModelSerializer):
    user_email = serializers.EmailField(source='user.email', read_only=True)

    class Meta:
        model = SupportTicket
        fields = ['id', 'user_email', 'subject', 'message', 'status', 'priority', 'created_at', 'updated_at']
        read_only_fields = ['id', 'user_email', 'status', 'created_at', 'updated_at']


class TicketStatusSerializer(serializers.ModelSerializer):
    class Meta:
        model = SupportTicket
        fields = ['status', 'priority']
