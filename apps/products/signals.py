# signals.py
from django.core.cache import cache
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import Category, Product


@receiver([post_save, post_delete], sender=Product)
@receiver([post_save, post_delete], sender=Category)
def invalidate_top_categories(sender, instance, **kwargs):
    """
    Product counts per category change whenever a product or category does,
    so the cached top categories list is dropped.
    """
    from .views import TOP_CATEGORIES_CACHE_KEY

    cache.delete(TOP_CATEGORIES_CACHE_KEY)
