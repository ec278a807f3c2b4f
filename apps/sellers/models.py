from decimal import Decimal

from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from apps.accounts.models import CustomUser


class SellerBusinessFields(models.Model):
    """Business and banking details shared by applications and approved profiles"""
    company_name = models.CharField(max_length=255)
    business_type = models.CharField(max_length=100, blank=True)
    business_address = models.TextField(blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    postal_code = models.CharField(max_length=20, blank=True)
    gst_number = models.CharField(max_length=30, blank=True)
    pan_number = models.CharField(max_length=30, blank=True)
    bank_name = models.CharField(max_length=150, blank=True)
    account_number = models.CharField(max_length=50, blank=True)
    ifsc_code = models.CharField(max_length=20, blank=True)
    account_holder_name = models.CharField(max_length=200, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class SellerProfile(SellerBusinessFields):
    user = models.OneToOneField(CustomUser, on_delete=models.CASCADE, related_name='seller_profile')
    category = models.ForeignKey(
        'products.Category', on_delete=models.SET_NULL, null=True, blank=True, related_name='sellers'
    )
    tax_id = models.CharField(max_length=50, blank=True)
    description = models.TextField(blank=True)
    website = models.URLField(blank=True)
    commission_rate = models.DecimalField(
        max_digits=5, decimal_places=4, default=Decimal('0.15'),
        validators=[MinValueValidator(0), MaxValueValidator(1)]
    )
    is_approved = models.BooleanField(default=False)
    approval_date = models.DateTimeField(null=True, blank=True)

    class Meta:
        indexes = [models.Index(fields=['is_approved'], name='sellers_profile_approved_idx')]

    def __str__(self):
        return f"{self.user} - {self.company_name}"


class SellerApplication(SellerBusinessFields):
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('approved', 'Approved'),
        ('rejected', 'Rejected'),
    ]

    email = models.EmailField(db_index=True)
    password_hash = models.CharField(max_length=255)
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    phone = models.CharField(max_length=20, blank=True, null=True)
    business_description = models.TextField(blank=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='pending')
    rejection_reason = models.TextField(blank=True)
    reviewed_by = models.ForeignKey(
        CustomUser, on_delete=models.SET_NULL, null=True, blank=True, related_name='reviewed_applications'
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['-created_at']

    def save(self, *args, **kwargs):
        if self.pk:
            self._previous_status = SellerApplication.objects.filter(pk=self.pk).values_list('status', flat=True).first()
        else:
            self._previous_status = None
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.company_name} <{self.email}> - {self.status}"
