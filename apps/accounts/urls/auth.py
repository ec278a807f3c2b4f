from django.urls import path
from apps.accounts.views import (
    SendOtpView,
    VerifyOtpView,
    ForgotPasswordView,
    ResetPasswordView,
    RegisterCustomerView,
    LoginView,
    LogoutView,
    RefreshView,
    MeView,
    DeleteAccountView,
    SendEmailOtpView,
    VerifyEmailOtpView,
)
from apps.sellers.views import SellerApplicationSubmitView
from apps.support.views import FeedbackSubmitView

urlpatterns = [
    path('send-otp/', SendOtpView.as_view(), name='send_otp'),
    path('verify-otp/', VerifyOtpView.as_view(), name='verify_otp'),
    path('forgot-password/', ForgotPasswordView.as_view(), name='forgot_password'),
    path('reset-password/', ResetPasswordView.as_view(), name='reset_password'),
    path('register/customer/', RegisterCustomerView.as_view(), name='register_customer'),
    path('register/seller/', SellerApplicationSubmitView.as_view(), name='register_seller'),
    path('apply/seller/', SellerApplicationSubmitView.as_view(), name='apply_seller'),
    path('login/', LoginView.as_view(), name='login'),
    path('refresh/', RefreshView.as_view(), name='token_refresh'),
    path('logout/', LogoutView.as_view(), name='logout'),
    path('me/', MeView.as_view(), name='me'),
    path('feedback/', FeedbackSubmitView.as_view(), name='feedback'),
    path('delete-account/', DeleteAccountView.as_view(), name='delete_account'),

    # Hashed email codes
    path('send-email-otp/', SendEmailOtpView.as_view(), name='send_email_otp'),
    path('verify-email-otp/', VerifyEmailOtpView.as_view(), name='verify_email_otp'),
]
