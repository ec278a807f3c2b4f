import logging

from django.conf import settings
from django.db import DatabaseError
from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import permissions, serializers, status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import UntypedToken
from rest_framework_simplejwt.views import TokenRefreshView

from apps.notifications.emails import EmailService
from .mock_store import MockUserStore
from .models import CustomUser, OtpVerification
from .permissions import IsCustomerPermission
from .serializers import (
    AddressSerializer,
    DeleteAccountSerializer,
    EmailOtpRequestSerializer,
    EmailOtpVerifySerializer,
    ForgotPasswordSerializer,
    LoginSerializer,
    RefreshSerializer,
    RegisterCustomerSerializer,
    ResetPasswordSerializer,
    SendOtpSerializer,
    UserSerializer,
    VerifyOtpSerializer,
)
from .services import AccountService, EmailOtpService, OtpError, OtpService
from .throttles import AuthRateThrottle
from .tokens import PasswordResetToken, issue_detached_tokens, issue_tokens, revoke_user_tokens

logger = logging.getLogger(__name__)


class SendOtpView(APIView):
    permission_classes = [permissions.AllowAny]
    throttle_classes = [AuthRateThrottle]

    @extend_schema(request=SendOtpSerializer, description='Email a six digit code for verification or password reset')
    def post(self, request):
        serializer = SendOtpSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data['email']
        otp_type = serializer.validated_data['type']

        record = OtpService.issue(email, otp_type)
        expiry_minutes = OtpService.expiry_minutes()
        if not EmailService().send_otp(email, record.otp, otp_type, expiry_minutes):
            return Response({
                'success': False,
                'error': 'Failed to send OTP email'
            }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({
            'success': True,
            'message': 'OTP sent successfully',
            'expires_in': expiry_minutes * 60,
        }, status=status.HTTP_200_OK)


class VerifyOtpView(APIView):
    permission_classes = [permissions.AllowAny]
    throttle_classes = [AuthRateThrottle]

    @extend_schema(request=VerifyOtpSerializer)
    def post(self, request):
        serializer = VerifyOtpSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if not OtpService.consume(data['email'], data['otp'], data['type']):
            return Response({
                'success': False,
                'error': 'Invalid or expired OTP'
            }, status=status.HTTP_400_BAD_REQUEST)

        if data['type'] == OtpVerification.TYPE_VERIFICATION:
            CustomUser.objects.filter(email=data['email']).update(is_verified=True)

        return Response({
            'success': True,
            'message': 'OTP verified successfully',
        }, status=status.HTTP_200_OK)


class ForgotPasswordView(APIView):
    permission_classes = [permissions.AllowAny]
    throttle_classes = [AuthRateThrottle]

    @extend_schema(request=ForgotPasswordSerializer)
    def post(self, request):
        serializer = ForgotPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data['email']

        user = CustomUser.objects.filter(email=email, is_active=True).first()
        if user is not None:
            token = PasswordResetToken.for_email(user.email)
            reset_link = f"{settings.FRONTEND_URL}/?resetToken={token}"
            if not EmailService().send_password_reset(user, reset_link):
                logger.error("Password reset email could not be sent to %s", email)

        # Same answer whether or not the account exists
        return Response({
            'success': True,
            'message': 'If the email exists, a reset link has been sent.',
        }, status=status.HTTP_200_OK)


class ResetPasswordView(APIView):
    permission_classes = [permissions.AllowAny]
    throttle_classes = [AuthRateThrottle]

    @extend_schema(request=ResetPasswordSerializer)
    def post(self, request):
        serializer = ResetPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            token = UntypedToken(serializer.validated_data['token'])
        except TokenError:
            return Response({
                'success': False,
                'error': 'Invalid or expired reset token'
            }, status=status.HTTP_400_BAD_REQUEST)

        user = None
        if token.get(api_settings.TOKEN_TYPE_CLAIM) == PasswordResetToken.token_type:
            user = CustomUser.objects.filter(email=token.get('email'), is_active=True).first()
        if user is None:
            return Response({
                'success': False,
                'error': 'Invalid reset token'
            }, status=status.HTTP_400_BAD_REQUEST)

        user.set_password(serializer.validated_data['new_password'])
        user.save(update_fields=['password'])
        revoke_user_tokens(user)
        logger.info("Password reset for %s", user.email)

        return Response({
            'success': True,
            'message': 'Password reset successfully',
        }, status=status.HTTP_200_OK)


class RegisterCustomerView(APIView):
    permission_classes = [permissions.AllowAny]
    throttle_classes = [AuthRateThrottle]

    @extend_schema(request=RegisterCustomerSerializer, responses={201: UserSerializer})
    def post(self, request):
        serializer = RegisterCustomerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info("Registered customer %s", user.email)

        return Response({
            'success': True,
            'message': 'Customer registered successfully',
            'user': UserSerializer(user).data,
            'requires_verification': not serializer.otp_verified,
            **issue_tokens(user),
        }, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    permission_classes = [permissions.AllowAny]
    throttle_classes = [AuthRateThrottle]
    serializer_class = LoginSerializer

    @extend_schema(request=LoginSerializer, responses={200: UserSerializer})
    def post(self, request):
        serializer = self.serializer_class(data=request.data, context={'request': request})
        try:
            serializer.is_valid(raise_exception=True)
        except DatabaseError as e:
            logger.warning("Database login failed, using mock credentials: %s", e)
            return self._mock_login(request.data)

        user = serializer.validated_data['user']
        return Response({
            'success': True,
            'message': 'Login successful',
            'user': UserSerializer(user).data,
            **issue_tokens(user),
        }, status=status.HTTP_200_OK)

    def _mock_login(self, data):
        store = MockUserStore()
        mock_user = store.find_by_email(data.get('email', ''))
        if not mock_user or not mock_user.get('is_active', True) or not store.check_password(mock_user, data.get('password', '')):
            return Response({
                'success': False,
                'error': 'Invalid credentials'
            }, status=status.HTTP_401_UNAUTHORIZED)

        return Response({
            'success': True,
            'message': 'Login successful (mock mode)',
            'user': store.public_data(mock_user),
            **issue_detached_tokens(mock_user['id'], mock_user['email'], mock_user['role']),
        }, status=status.HTTP_200_OK)


class LogoutView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        revoked = revoke_user_tokens(request.user)
        logger.info("Logged out %s, revoked %s refresh tokens", request.user.email, revoked)
        return Response({
            'success': True,
            'message': 'Logged out successfully',
        }, status=status.HTTP_200_OK)


class RefreshView(TokenRefreshView):
    """Rotating refresh; the old refresh token is blacklisted."""
    serializer_class = RefreshSerializer


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses=UserSerializer)
    def get(self, request):
        return Response({
            'success': True,
            'user': UserSerializer(request.user).data,
        }, status=status.HTTP_200_OK)


class DeleteAccountView(APIView):
    permission_classes = [IsAuthenticated, IsCustomerPermission]

    @extend_schema(request=DeleteAccountSerializer)
    def post(self, request):
        serializer = DeleteAccountSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        AccountService.delete_customer_account(request.user, serializer.validated_data.get('reason', ''))
        return Response({
            'success': True,
            'message': 'Account deleted successfully',
        }, status=status.HTTP_200_OK)


class SendEmailOtpView(APIView):
    permission_classes = [permissions.AllowAny]
    throttle_classes = [AuthRateThrottle]

    @extend_schema(request=EmailOtpRequestSerializer)
    def post(self, request):
        serializer = EmailOtpRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data['email']

        otp = EmailOtpService.issue(email)
        expiry_minutes = settings.MARKETPLACE_SETTINGS['EMAIL_OTP_EXPIRY_MINUTES']
        if not EmailService().send_otp(email, otp, OtpVerification.TYPE_VERIFICATION, expiry_minutes):
            return Response({
                'success': False,
                'error': 'Failed to send OTP email'
            }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({
            'success': True,
            'message': 'OTP sent to your email',
            'expires_in': expiry_minutes * 60,
        }, status=status.HTTP_200_OK)


class VerifyEmailOtpView(APIView):
    permission_classes = [permissions.AllowAny]
    throttle_classes = [AuthRateThrottle]

    @extend_schema(
        request=EmailOtpVerifySerializer,
        responses=inline_serializer('EmailOtpVerified', fields={
            'success': serializers.BooleanField(),
            'message': serializers.CharField(),
        }),
    )
    def post(self, request):
        serializer = EmailOtpVerifySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            EmailOtpService.verify(serializer.validated_data['email'], serializer.validated_data['otp'])
        except OtpError as e:
            return Response({
                'success': False,
                'error': str(e)
            }, status=status.HTTP_400_BAD_REQUEST)

        return Response({
            'success': True,
            'message': 'Email verified successfully',
        }, status=status.HTTP_200_OK)


class AddressViewSet(viewsets.ModelViewSet):
    serializer_class = AddressSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return self.request.user.addresses.all()

    def perform_create(self, serializer):
        serializer.save(user=self.request.user)
