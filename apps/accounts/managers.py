from django.contrib.auth.models import BaseUserManager
from django.core.validators import validate_email
from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _


class CustomUserManager(BaseUserManager):
    def email_validator(self, email):
        try:
            validate_email(email)
        except ValidationError:
            raise ValueError(_("please enter a valid email"))

    def create_user(self, email, password=None, **extra_fields):
        if email:
            email = self.normalize_email(email).lower()
            self.email_validator(email)
        else:
            raise ValueError("The Email field must be set")
        user = self.model(email=email, **extra_fields)
        user.set_password(password)  # Hashes the password, None leaves it unusable
        user.save(using=self._db)
        return user

    def create_user_with_hash(self, email, password_hash, **extra_fields):
        """Create a user from an already hashed password, e.g. an approved seller application"""
        user = self.create_user(email, password=None, **extra_fields)
        user.password = password_hash
        user.save(using=self._db, update_fields=['password'])
        return user

    def create_superuser(self, email, password, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_verified", True)
        extra_fields.setdefault("role", "admin")

        if extra_fields.get("is_staff") is not True:
            raise ValueError(_("is staff must be true for admin user"))

        if extra_fields.get("is_superuser") is not True:
            raise ValueError(_("is superuser must be true for admin user"))

        return self.create_user(email, password, **extra_fields)
