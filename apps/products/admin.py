from django.contrib import admin
from mptt.admin import MPTTModelAdmin
from .models import Category, Product, ProductVariant


@admin.register(Category)
class CategoryAdmin(MPTTModelAdmin):
    list_display = ('name', 'parent', 'is_active', 'created_at')
    list_filter = ('is_active', 'created_at')
    search_fields = ('name', 'description')
    prepopulated_fields = {'slug': ('name',)}


class ProductVariantInline(admin.TabularInline):
    model = ProductVariant
    extra = 0


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('name', 'seller', 'category', 'price', 'stock_quantity', 'status', 'is_featured')
    list_filter = ('status', 'is_featured', 'category')
    search_fields = ('name', 'description', 'sku', 'seller__email')
    list_editable = ('status', 'is_featured', 'stock_quantity')
    readonly_fields = ('slug', 'created_at', 'updated_at')
    inlines = [ProductVariantInline]


@admin.register(ProductVariant)
class ProductVariantAdmin(admin.ModelAdmin):
    list_display = ('product', 'name', 'value', 'price_adjustment', 'stock_quantity')
    search_fields = ('product__name', 'sku')
