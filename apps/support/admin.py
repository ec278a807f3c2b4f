from django.contrib import admin
from .models import CustomerFeedback, SupportTicket


@admin.register(CustomerFeedback)
class CustomerFeedbackAdmin(admin.ModelAdmin):
    list_display = ('name', 'email', 'feedback_type', 'rating', 'status', 'created_at')
    list_filter = ('feedback_type', 'status', 'rating')
    search_fields = ('name', 'email', 'message')
    readonly_fields = ('created_at', 'updated_at', 'responded_at')


@admin.register(SupportTicket)
class SupportTicketAdmin(admin.ModelAdmin):
    list_display = ('subject', 'user', 'status', 'priority', 'created_at')
    list_filter = ('status', 'priority')
    search_fields = ('subject', 'message', 'user__email')
