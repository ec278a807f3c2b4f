from django.urls import path
from . import views

urlpatterns = [
    path('seller/stats/', views.seller_stats, name='seller-stats'),
    path('admin/stats/', views.admin_stats, name='admin-stats'),
]
