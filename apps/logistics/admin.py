from django.contrib import admin
from .models import OrderTracking


@admin.register(OrderTracking)
class OrderTrackingAdmin(admin.ModelAdmin):
    list_display = ('order', 'status', 'location', 'created_by', 'created_at')
    list_filter = ('status', 'created_at')
    search_fields = ('order__order_number', 'order__tracking_number', 'description')
    raw_id_fields = ('order', 'created_by')
