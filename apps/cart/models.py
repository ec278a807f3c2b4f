from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from apps.accounts.models import CustomUser
from apps.products.models import Product, ProductVariant


class CartItem(models.Model):
    user = models.ForeignKey(CustomUser, on_delete=models.CASCADE, related_name='cart_items')
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='cart_items')
    variant = models.ForeignKey(ProductVariant, on_delete=models.CASCADE, null=True, blank=True, related_name='cart_items')
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1), MaxValueValidator(10)])
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'product', 'variant'], name='unique_cart_line'),
        ]

    def __str__(self):
        return f"{self.user.email} - {self.product.name} x {self.quantity}"

    @property
    def unit_price(self):
        if self.variant_id:
            return self.variant.unit_price
        return self.product.price

    @property
    def total_price(self):
        return self.unit_price * self.quantity

    @property
    def available_stock(self):
        if self.variant_id:
            return self.variant.stock_quantity
        return self.product.stock_quantity
