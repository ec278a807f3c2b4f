from rest_framework import serializers

from apps.accounts.models import CustomUser
from apps.accounts.serializers import get_seller_profile
from apps.orders.models import Order
from apps.products.serializers import seller_company_name
from apps.products.models import Product
from apps.support.models import CustomerFeedback


def account_status(is_active):
    return 'ACTIVE' if is_active else 'SUSPENDED'


class PageQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(min_value=1, default=1)
    limit = serializers.IntegerField(min_value=1, max_value=100, default=20)


class UserListQuerySerializer(PageQuerySerializer):
    role = serializers.ChoiceField(choices=CustomUser.ROLE_CHOICES, required=False)


class AdminUserSerializer(serializers.ModelSerializer):
    name = serializers.SerializerMethodField()
    status = serializers.SerializerMethodField()
    company_name = serializers.SerializerMethodField()
    seller_approved = serializers.SerializerMethodField()

    class Meta:
        model = CustomUser
        fields = [
            'id', 'name', 'email', 'role', 'phone', 'status', 'is_verified',
            'company_name', 'seller_approved', 'created_at',
        ]

    def get_name(self, obj):
        return obj.full_name.strip() or 'Unknown User'

    def get_status(self, obj):
        return account_status(obj.is_active)

    def get_company_name(self, obj):
        return seller_company_name(obj)

    def get_seller_approved(self, obj):
        profile = get_seller_profile(obj)
        return profile.is_approved if profile else None


class AdminSellerSerializer(AdminUserSerializer):
    is_approved = serializers.SerializerMethodField()

    class Meta(AdminUserSerializer.Meta):
        fields = [
            'id', 'name', 'email', 'role', 'phone', 'status', 'company_name',
            'is_approved', 'is_verified', 'created_at',
        ]

    def get_company_name(self, obj):
        return seller_company_name(obj) or 'N/A'

    def get_is_approved(self, obj):
        profile = get_seller_profile(obj)
        return bool(profile and profile.is_approved)


class PendingSellerSerializer(serializers.ModelSerializer):
    company_name = serializers.CharField(source='seller_profile.company_name', read_only=True)
    business_type = serializers.CharField(source='seller_profile.business_type', read_only=True)
    description = serializers.CharField(source='seller_profile.description', read_only=True)
    application_date = serializers.DateTimeField(source='seller_profile.created_at', read_only=True)

    class Meta:
        model = CustomUser
        fields = [
            'id', 'email', 'first_name', 'last_name', 'phone', 'created_at',
            'company_name', 'business_type', 'description', 'application_date',
        ]


class SellerApprovalSerializer(serializers.Serializer):
    is_approved = serializers.BooleanField()
    reason = serializers.CharField(required=False, allow_blank=True)


class AdminProductSerializer(serializers.ModelSerializer):
    category_name = serializers.CharField(source='category.name', read_only=True, default=None)
    seller_name = serializers.CharField(source='seller.full_name', read_only=True)
    company_name = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'description', 'price', 'compare_price', 'sku', 'stock_quantity',
            'images', 'status', 'is_featured', 'category_id', 'category_name', 'seller_id',
            'seller_name', 'company_name', 'created_at', 'updated_at',
        ]

    def get_company_name(self, obj):
        return seller_company_name(obj.seller)


class ProductListQuerySerializer(PageQuerySerializer):
    status = serializers.ChoiceField(choices=Product.STATUS_CHOICES, default='pending_approval')


class AdminOrderSerializer(serializers.ModelSerializer):
    customer_name = serializers.SerializerMethodField()
    customer_email = serializers.EmailField(source='customer.email', read_only=True, default=None)
    items_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'order_number', 'status', 'payment_status', 'payment_method', 'total_amount',
            'currency', 'tracking_number', 'customer_name', 'customer_email', 'items_count',
            'created_at', 'updated_at',
        ]

    def get_customer_name(self, obj):
        return obj.customer.full_name if obj.customer else None


class FeedbackListQuerySerializer(PageQuerySerializer):
    status = serializers.ChoiceField(choices=CustomerFeedback.STATUS_CHOICES, required=False)
    type = serializers.ChoiceField(choices=CustomerFeedback.TYPE_CHOICES, required=False)


class MockSellerSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, write_only=True)
    name = serializers.CharField(max_length=200)
    storeName = serializers.CharField(max_length=255)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)

    def validate_email(self, value):
        return value.lower()
