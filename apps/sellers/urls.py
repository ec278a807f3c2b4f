from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import SellerApplicationViewSet

router = SimpleRouter()
router.register('', SellerApplicationViewSet, basename='seller-application')

urlpatterns = [
    path('', include(router.urls)),
]
