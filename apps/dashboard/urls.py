from django.urls import path
from apps.logistics.views import SellerLogisticsOverviewView, SellerReturnsView, SellerShipmentsView
from . import views

urlpatterns = [
    path('dashboard/', views.seller_dashboard, name='seller-dashboard'),
    path('dashboard/trends/', views.seller_trends, name='seller-trends'),
    path('orders/', views.seller_recent_orders, name='seller-orders'),
    path('top-products/', views.seller_top_products, name='seller-top-products'),
    path('analytics/', views.seller_analytics, name='seller-analytics'),

    # Logistics
    path('logistics/overview/', SellerLogisticsOverviewView.as_view(), name='seller-logistics-overview'),
    path('logistics/shipments/', SellerShipmentsView.as_view(), name='seller-logistics-shipments'),
    path('logistics/returns/', SellerReturnsView.as_view(), name='seller-logistics-returns'),
]
