from django.urls import path
from .views import GenerateTrackingView, LogisticsStatsView, OrderTrackingView, ShipmentListView

urlpatterns = [
    path('shipments/', ShipmentListView.as_view(), name='shipments'),
    path('tracking/<int:order_id>/', OrderTrackingView.as_view(), name='order_tracking'),
    path('generate-tracking/<int:order_id>/', GenerateTrackingView.as_view(), name='generate_tracking'),
    path('stats/', LogisticsStatsView.as_view(), name='logistics_stats'),
]
