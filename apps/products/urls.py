from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import ProductViewSet, SellerDetailView, SellerProductsView

router = SimpleRouter()
router.register('', ProductViewSet, basename='product')

urlpatterns = [
    path('sellers/<int:seller_id>/', SellerDetailView.as_view(), name='seller_detail'),
    path('sellers/<int:seller_id>/products/', SellerProductsView.as_view(), name='seller_products'),
    path('', include(router.urls)),
]
