from django.urls import path
from .views import CartItemCreateView, CartItemDetailView, CartView

urlpatterns = [
    path('', CartView.as_view(), name='cart'),
    path('items/', CartItemCreateView.as_view(), name='cart_items'),
    path('items/<int:pk>/', CartItemDetailView.as_view(), name='cart_item_detail'),
]
