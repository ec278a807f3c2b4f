from django.urls import path

from . import views

urlpatterns = [
    path('users/', views.UserListView.as_view(), name='admin-users'),
    path('users/<int:user_id>/toggle-status/', views.ToggleUserStatusView.as_view(), name='admin-user-toggle'),
    path('sellers/', views.SellerListView.as_view(), name='admin-sellers'),
    path('sellers/pending/', views.PendingSellerListView.as_view(), name='admin-sellers-pending'),
    path('sellers/<int:seller_id>/approval/', views.SellerApprovalView.as_view(), name='admin-seller-approval'),
    path('products/', views.AdminProductListView.as_view(), name='admin-products'),
    path('products/<int:product_id>/approval/', views.ProductApprovalView.as_view(), name='admin-product-approval'),
    path('orders/', views.AdminOrderListView.as_view(), name='admin-orders'),
    path('feedback/', views.FeedbackListView.as_view(), name='admin-feedback'),
    path('feedback/stats/', views.FeedbackStatsView.as_view(), name='admin-feedback-stats'),
    path('feedback/<int:feedback_id>/', views.FeedbackDetailView.as_view(), name='admin-feedback-detail'),
    path('feedback/<int:feedback_id>/respond/', views.FeedbackRespondView.as_view(), name='admin-feedback-respond'),
    path('mock-sellers/', views.MockSellerCreateView.as_view(), name='admin-mock-sellers'),
]
