from django.contrib import admin

from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ('product', 'variant', 'seller', 'product_name', 'quantity', 'unit_price', 'total_price')
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('order_number', 'customer', 'status', 'payment_status', 'total_amount', 'total_items', 'created_at')
    list_filter = ('status', 'payment_status', 'payment_method', 'created_at')
    search_fields = ('customer__email', 'order_number', 'tracking_number')
    readonly_fields = ('order_number', 'subtotal', 'tax_amount', 'shipping_amount', 'total_amount',
                       'created_at', 'updated_at')
    inlines = [OrderItemInline]

    def total_items(self, obj):
        return obj.total_items()
    total_items.short_description = 'Total Items'
