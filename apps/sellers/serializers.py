from django.contrib.auth.hashers import make_password
from rest_framework import serializers

from .models import SellerApplication


def optional_text(source, max_length=None):
    return serializers.CharField(source=source, max_length=max_length, required=False, allow_blank=True)


class SellerApplicationCreateSerializer(serializers.ModelSerializer):
    """Application form as the seller panel posts it."""
    password = serializers.CharField(min_length=6, write_only=True)
    firstName = serializers.CharField(source='first_name', max_length=100)
    lastName = serializers.CharField(source='last_name', max_length=100)
    companyName = serializers.CharField(source='company_name', max_length=255)
    businessType = optional_text('business_type', 100)
    businessDescription = optional_text('business_description')
    businessAddress = optional_text('business_address')
    postalCode = optional_text('postal_code', 20)
    gstNumber = optional_text('gst_number', 30)
    panNumber = optional_text('pan_number', 30)
    bankName = optional_text('bank_name', 150)
    accountNumber = optional_text('account_number', 50)
    ifscCode = optional_text('ifsc_code', 20)
    accountHolderName = optional_text('account_holder_name', 200)

    class Meta:
        model = SellerApplication
        fields = [
            'email', 'password', 'firstName', 'lastName', 'phone', 'companyName',
            'businessType', 'businessDescription', 'businessAddress', 'city', 'state',
            'postalCode', 'gstNumber', 'panNumber', 'bankName', 'accountNumber',
            'ifscCode', 'accountHolderName',
        ]
        extra_kwargs = {
            'city': {'required': False, 'allow_blank': True},
            'state': {'required': False, 'allow_blank': True},
        }

    def validate_email(self, value):
        return value.lower()

    def create(self, validated_data):
        validated_data['password_hash'] = make_password(validated_data.pop('password'))
        return super().create(validated_data)


class SellerApplicationSerializer(serializers.ModelSerializer):
    reviewed_by_email = serializers.EmailField(source='reviewed_by.email', read_only=True, default=None)

    class Meta:
        model = SellerApplication
        exclude = ['password_hash']


class ApproveApplicationSerializer(serializers.Serializer):
    category_id = serializers.IntegerField(required=False, allow_null=True)


class RejectApplicationSerializer(serializers.Serializer):
    reason = serializers.CharField(trim_whitespace=True)
