from django.contrib import admin
from .models import SellerProfile, SellerApplication


@admin.register(SellerProfile)
class SellerProfileAdmin(admin.ModelAdmin):
    list_display = ('company_name', 'user', 'business_type', 'is_approved', 'approval_date', 'commission_rate')
    list_filter = ('is_approved', 'business_type')
    search_fields = ('company_name', 'user__email', 'gst_number', 'pan_number')
    raw_id_fields = ('user',)


@admin.register(SellerApplication)
class SellerApplicationAdmin(admin.ModelAdmin):
    list_display = ('company_name', 'email', 'status', 'created_at', 'reviewed_at')
    list_filter = ('status',)
    search_fields = ('company_name', 'email', 'first_name', 'last_name')
    exclude = ('password_hash',)
    readonly_fields = ('reviewed_by', 'reviewed_at')
