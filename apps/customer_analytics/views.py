import csv
import io
import logging
import math

from django.http import HttpResponse
from django.utils import timezone
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.permissions import IsSellerPermission
from .serializers import (
    CustomerInsightsSerializer,
    CustomerListQuerySerializer,
    CustomerOverviewSerializer,
    CustomerRowSerializer,
    DateRangeQuerySerializer,
)
from .services import CustomerAnalyticsService

logger = logging.getLogger(__name__)


def csv_response(prefix, header, rows):
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(header)
    writer.writerows(rows)

    filename = f"{prefix}_{timezone.localdate().isoformat()}.csv"
    response = HttpResponse(buffer.getvalue(), content_type='text/csv')
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response


def read_date_range(request):
    params = DateRangeQuerySerializer(data=request.query_params)
    params.is_valid(raise_exception=True)
    return params.validated_data.get('startDate'), params.validated_data.get('endDate')


class SellerCustomerView(APIView):
    permission_classes = [IsAuthenticated, IsSellerPermission]

    def get_service(self):
        return CustomerAnalyticsService(self.request.user)

    def get_customer_or_404(self, customer_id):
        customer = self.get_service().get_customer(customer_id)
        if customer is None:
            return None, Response({
                'success': False,
                'error': 'Customer not found'
            }, status=status.HTTP_404_NOT_FOUND)
        return customer, None


class CustomerOverviewView(SellerCustomerView):

    @extend_schema(parameters=[DateRangeQuerySerializer], responses=CustomerOverviewSerializer)
    def get(self, request):
        start_date, end_date = read_date_range(request)
        data = self.get_service().overview(start_date, end_date)
        return Response({'success': True, 'data': data})


class CustomerListView(SellerCustomerView):
    """Seller's customers by spend, with segment and type labels"""

    @extend_schema(parameters=[CustomerListQuerySerializer], responses=CustomerRowSerializer(many=True))
    def get(self, request):
        params = CustomerListQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        query = params.validated_data

        customers = self.get_service().customer_list(
            search=query.get('search') or None,
            segment=query.get('segment'),
            start_date=query.get('startDate'),
            end_date=query.get('endDate'),
        )

        page, limit = query['page'], query['limit']
        offset = (page - 1) * limit
        return Response({
            'success': True,
            'data': CustomerRowSerializer(customers[offset:offset + limit], many=True).data,
            'total': len(customers),
            'page': page,
            'total_pages': math.ceil(len(customers) / limit),
        })


class CustomerProfileView(SellerCustomerView):

    def get(self, request, customer_id):
        customer, error = self.get_customer_or_404(customer_id)
        if error:
            return error
        return Response({'success': True, 'data': self.get_service().profile(customer)})


class CustomerActivityView(SellerCustomerView):

    def get(self, request, customer_id):
        customer, error = self.get_customer_or_404(customer_id)
        if error:
            return error
        return Response({'success': True, 'data': self.get_service().activity(customer)})


class CustomerInsightsView(SellerCustomerView):

    @extend_schema(responses=CustomerInsightsSerializer)
    def get(self, request, customer_id):
        customer, error = self.get_customer_or_404(customer_id)
        if error:
            return error
        return Response({'success': True, 'data': self.get_service().insights(customer)})


class SegmentationView(SellerCustomerView):

    def get(self, request):
        return Response({'success': True, 'data': self.get_service().segmentation()})


# ==================== CSV EXPORTS ====================

class ExportCustomersView(SellerCustomerView):

    @extend_schema(parameters=[DateRangeQuerySerializer], responses={(200, 'text/csv'): OpenApiTypes.STR})
    def get(self, request):
        start_date, end_date = read_date_range(request)
        rows = self.get_service().customer_export_rows(start_date, end_date)
        logger.info("Seller %s exported customers", request.user.email)
        return csv_response(
            'customers',
            ['Email', 'First Name', 'Last Name', 'Phone', 'Total Orders', 'Total Spent', 'Last Order Date'],
            rows,
        )


class ExportPurchaseReportView(SellerCustomerView):

    @extend_schema(parameters=[DateRangeQuerySerializer], responses={(200, 'text/csv'): OpenApiTypes.STR})
    def get(self, request):
        start_date, end_date = read_date_range(request)
        rows = self.get_service().purchase_export_rows(start_date, end_date)
        return csv_response(
            'purchase_report',
            ['Email', 'Customer Name', 'Order Number', 'Order Date', 'Product Name',
             'Quantity', 'Unit Price', 'Total Price'],
            rows,
        )


class ExportRepeatCustomersView(SellerCustomerView):

    @extend_schema(responses={(200, 'text/csv'): OpenApiTypes.STR})
    def get(self, request):
        rows = self.get_service().repeat_customer_export_rows()
        return csv_response(
            'repeat_customers',
            ['Email', 'First Name', 'Last Name', 'Phone', 'Total Orders', 'Total Spent',
             'Last Order Date', 'First Order Date'],
            rows,
        )
