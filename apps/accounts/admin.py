from django.contrib import admin
from .models import CustomUser, Address, OtpVerification, EmailOtp, AccountDeletionRequest


class AddressInline(admin.TabularInline):
    model = Address
    extra = 0


@admin.register(CustomUser)
class CustomUserAdmin(admin.ModelAdmin):
    list_display = ('email', 'first_name', 'last_name', 'role', 'is_active', 'is_verified', 'created_at')
    list_filter = ('role', 'is_active', 'is_verified', 'is_staff')
    search_fields = ('email', 'first_name', 'last_name', 'phone')
    ordering = ('-created_at',)
    inlines = [AddressInline]

    fieldsets = (
        (None, {'fields': ('email', 'first_name', 'last_name', 'phone', 'role')}),
        ('Permissions', {'fields': ('is_active', 'is_verified', 'is_staff', 'is_superuser')}),
        ('Important dates', {'fields': ('last_login', 'created_at', 'updated_at')}),
    )
    readonly_fields = ('last_login', 'created_at', 'updated_at')


@admin.register(OtpVerification)
class OtpVerificationAdmin(admin.ModelAdmin):
    list_display = ('email', 'otp_type', 'is_used', 'expires_at', 'created_at')
    list_filter = ('otp_type', 'is_used')
    search_fields = ('email',)
    exclude = ('otp',)


@admin.register(EmailOtp)
class EmailOtpAdmin(admin.ModelAdmin):
    list_display = ('email', 'attempts', 'expires_at', 'created_at')
    search_fields = ('email',)
    exclude = ('otp_hash',)


@admin.register(AccountDeletionRequest)
class AccountDeletionRequestAdmin(admin.ModelAdmin):
    list_display = ('email', 'status', 'created_at', 'processed_at')
    list_filter = ('status',)
    search_fields = ('email', 'reason')
