from rest_framework import serializers

from apps.accounts.serializers import get_seller_profile
from .models import Category, Product, ProductVariant


def seller_company_name(user):
    profile = get_seller_profile(user)
    return profile.company_name if profile else None


class CategorySerializer(serializers.ModelSerializer):
    parent_id = serializers.PrimaryKeyRelatedField(
        source='parent', queryset=Category.objects.all(), required=False, allow_null=True
    )
    products_count = serializers.IntegerField(read_only=True, default=0)

    class Meta:
        model = Category
        fields = ['id', 'name', 'slug', 'description', 'parent_id', 'is_active', 'products_count', 'created_at']
        read_only_fields = ['slug', 'created_at']


class ProductVariantSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductVariant
        fields = ['id', 'name', 'value', 'price_adjustment', 'stock_quantity', 'sku']


class ProductListSerializer(serializers.ModelSerializer):
    category_name = serializers.CharField(source='category.name', read_only=True, default=None)
    seller_name = serializers.CharField(source='seller.full_name', read_only=True)
    company_name = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'description', 'short_description', 'price', 'compare_price',
            'images', 'stock_quantity', 'is_featured', 'created_at',
            'category_name', 'seller_name', 'company_name',
        ]

    def get_company_name(self, obj):
        return seller_company_name(obj.seller)


class ProductDetailSerializer(ProductListSerializer):
    variants = ProductVariantSerializer(many=True, read_only=True)

    class Meta(ProductListSerializer.Meta):
        fields = ProductListSerializer.Meta.fields + [
            'seller_id', 'category_id', 'sku', 'weight', 'dimensions', 'status',
            'seo_title', 'seo_description', 'variants', 'updated_at',
        ]


class SellerProductSerializer(serializers.ModelSerializer):
    """Read/write shape used by sellers managing their own catalogue"""
    category_id = serializers.PrimaryKeyRelatedField(
        source='category', queryset=Category.objects.all(), required=False, allow_null=True
    )
    category_name = serializers.CharField(source='category.name', read_only=True, default=None)
    images = serializers.ListField(child=serializers.CharField(), required=False)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'description', 'short_description', 'price', 'compare_price',
            'cost_price', 'category_id', 'category_name', 'stock_quantity', 'min_stock_level',
            'sku', 'weight', 'dimensions', 'images', 'status', 'is_featured',
            'seo_title', 'seo_description', 'created_at', 'updated_at',
        ]
        read_only_fields = ['slug', 'status', 'is_featured', 'created_at', 'updated_at']
        extra_kwargs = {
            # Uniqueness is answered by the view with its own message
            'sku': {'validators': []},
            'description': {'max_length': 5000},
        }

    def validate_price(self, value):
        if value < 0:
            raise serializers.ValidationError("Price must not be negative.")
        return value

    def validate_sku(self, value):
        return value or None


class ProductApprovalSerializer(serializers.Serializer):
    status = serializers.CharField()


class TopCategorySerializer(serializers.ModelSerializer):
    product_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Category
        fields = ['id', 'name', 'slug', 'product_count']


class SellerDetailSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    email = serializers.EmailField()
    phone = serializers.CharField(allow_null=True)
    seller_profile = serializers.SerializerMethodField()

    def get_seller_profile(self, obj):
        profile = get_seller_profile(obj)
        if profile is None:
            return None
        return {
            'id': profile.id,
            'company_name': profile.company_name,
            'business_type': profile.business_type,
            'description': profile.description,
            'website': profile.website,
            'address': profile.business_address,
            'city': profile.city,
            'state': profile.state,
            'postal_code': profile.postal_code,
            'is_approved': profile.is_approved,
        }
