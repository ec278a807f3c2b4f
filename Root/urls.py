from django.contrib import admin
from django.urls import path, include
from django.contrib.admin.views.decorators import staff_member_required
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

from apps.core.views import health

urlpatterns = [
    path("api/schema/", staff_member_required(SpectacularAPIView.as_view()), name="schema"),
    path("api/docs/swagger/", staff_member_required(SpectacularSwaggerView.as_view(url_name="schema")), name="swagger-ui"),
    path("api/docs/redoc/", staff_member_required(SpectacularRedocView.as_view(url_name="schema")), name="redoc"),
    path('admin/', admin.site.urls),
    path('health', health, name='health'),
    path('api/v1/auth/', include('apps.accounts.urls.auth')),
    path('api/v1/user-mgt/', include('apps.accounts.urls.user_mgt')),
    path('api/v1/products/', include('apps.products.urls')),
    path('api/v1/categories/', include('apps.products.category_urls')),
    path('api/v1/cart/', include('apps.cart.urls')),
    path('api/v1/orders/', include('apps.orders.urls')),
    path('api/v1/seller-applications/', include('apps.sellers.urls')),
    path('api/v1/admin/', include('apps.backoffice.urls')),
    path('api/v1/analytics/', include('apps.dashboard.analytics_urls')),
    path('api/v1/seller/', include('apps.dashboard.urls')),
    path('api/v1/customer-analytics/', include('apps.customer_analytics.urls')),
    path('api/v1/logistics/', include('apps.logistics.urls')),
    path('api/v1/chatbot/', include('apps.chatbot.urls')),
    path('api/v1/support/', include('apps.support.urls')),
]

handler404 = 'apps.core.views.route_not_found'
