from django.urls import path

from . import views

urlpatterns = [
    path('analytics/overview/', views.CustomerOverviewView.as_view(), name='customer-overview'),
    path('customers/', views.CustomerListView.as_view(), name='customer-list'),
    path('customers/<int:customer_id>/', views.CustomerProfileView.as_view(), name='customer-profile'),
    path('customers/<int:customer_id>/activity/', views.CustomerActivityView.as_view(), name='customer-activity'),
    path('customers/<int:customer_id>/ai-insights/', views.CustomerInsightsView.as_view(), name='customer-insights'),
    path('segmentation/', views.SegmentationView.as_view(), name='customer-segmentation'),
    path('export/customers/', views.ExportCustomersView.as_view(), name='export-customers'),
    path('export/purchase-report/', views.ExportPurchaseReportView.as_view(), name='export-purchase-report'),
    path('export/repeat-customers/', views.ExportRepeatCustomersView.as_view(), name='export-repeat-customers'),
]
