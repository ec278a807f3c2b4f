from django.contrib.auth import authenticate
from django.core.exceptions import ObjectDoesNotExist
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed, PermissionDenied
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.tokens import RefreshToken

from .authentication import has_database_user
from .models import Address, CustomUser, OtpVerification
from .services import OtpService


def get_seller_profile(user):
    try:
        return user.seller_profile
    except ObjectDoesNotExist:
        return None


class UserSerializer(serializers.ModelSerializer):
    company_name = serializers.SerializerMethodField()
    business_type = serializers.SerializerMethodField()
    seller_approved = serializers.SerializerMethodField()

    class Meta:
        model = CustomUser
        fields = [
            'id', 'email', 'role', 'first_name', 'last_name', 'phone', 'is_verified',
            'company_name', 'business_type', 'seller_approved', 'created_at',
        ]
        read_only_fields = fields

    def get_company_name(self, obj):
        profile = get_seller_profile(obj)
        return profile.company_name if profile else None

    def get_business_type(self, obj):
        profile = get_seller_profile(obj)
        return profile.business_type if profile else None

    def get_seller_approved(self, obj):
        profile = get_seller_profile(obj)
        return bool(profile and profile.is_approved)


class SendOtpSerializer(serializers.Serializer):
    email = serializers.EmailField()
    type = serializers.ChoiceField(choices=OtpVerification.TYPE_CHOICES, default=OtpVerification.TYPE_VERIFICATION)

    def validate_email(self, value):
        return value.lower()


class VerifyOtpSerializer(SendOtpSerializer):
    otp = serializers.RegexField(r'^\d{6}$', error_messages={'invalid': 'OTP must be 6 digits'})


class ForgotPasswordSerializer(serializers.Serializer):
    email = serializers.EmailField()

    def validate_email(self, value):
        return value.lower()


class ResetPasswordSerializer(serializers.Serializer):
    token = serializers.CharField()
    newPassword = serializers.CharField(source='new_password', min_length=6, write_only=True)


class RegisterCustomerSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, write_only=True)
    firstName = serializers.CharField(source='first_name', max_length=100)
    lastName = serializers.CharField(source='last_name', max_length=100)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    otp = serializers.RegexField(r'^\d{6}$', required=False, allow_blank=True)

    def validate_email(self, value):
        value = value.lower()
        if CustomUser.objects.filter(email=value).exists():
            raise serializers.ValidationError('Email already registered')
        return value

    def create(self, validated_data):
        otp = validated_data.pop('otp', None)
        self.otp_verified = bool(otp) and OtpService.consume(
            validated_data['email'], otp, OtpVerification.TYPE_VERIFICATION
        )
        # Registration through the panel is trusted, the flag only tells the client to confirm later
        return CustomUser.objects.create_user(
            email=validated_data['email'],
            password=validated_data['password'],
            first_name=validated_data['first_name'],
            last_name=validated_data['last_name'],
            phone=validated_data.get('phone') or None,
            role=CustomUser.ROLE_CUSTOMER,
            is_verified=True,
        )


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, data):
        email = data['email'].lower()
        user = authenticate(request=self.context.get('request'), email=email, password=data['password'])

        if user is None:
            raise AuthenticationFailed('Invalid credentials')

        if not user.is_verified:
            raise PermissionDenied('Email not verified. Please verify your email first.')

        if user.is_seller:
            profile = get_seller_profile(user)
            if not profile or not profile.is_approved:
                raise PermissionDenied('Seller account pending approval')

        data['user'] = user
        return data


class RefreshSerializer(TokenRefreshSerializer):
    def validate(self, attrs):
        # Mock store tokens have no database user to rotate against
        if not has_database_user(RefreshToken(attrs['refresh'])):
            raise InvalidToken('Token contained no recognizable user identification')
        return super().validate(attrs)


class DeleteAccountSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, max_length=1000)


class EmailOtpRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()

    def validate_email(self, value):
        return value.lower()


class EmailOtpVerifySerializer(EmailOtpRequestSerializer):
    otp = serializers.RegexField(r'^\d{6}$', error_messages={'invalid': 'OTP must be 6 digits'})


class AddressSerializer(serializers.ModelSerializer):
    class Meta:
        model = Address
        fields = [
            'id', 'label', 'full_name', 'phone', 'street', 'city', 'state',
            'postal_code', 'country', 'is_default', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
