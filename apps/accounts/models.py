from django.contrib.auth.models import AbstractUser
from django.db import models
from django.db.models import UniqueConstraint
from django.db.models.functions import Lower

from apps.common.models import BaseModel


class User(BaseModel, AbstractUser):
    """Custom User with UUID primary key, timestamps and a console role.

    `role` only drives routing/visibility: staff land on the order console,
    admins on the dashboard. Pricing and lifecycle rules never look at it.
    """

    ROLE_STAFF = "staff"
    ROLE_ADMIN = "admin"
    ROLE_CHOICES = [(ROLE_STAFF, "Staff"), (ROLE_ADMIN, "Admin")]

    email = models.EmailField("email address", blank=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_STAFF)
    full_name = models.CharField(max_length=160, blank=True)

    class Meta(AbstractUser.Meta):
        constraints = [
            UniqueConstraint(
                Lower("email"), name="accounts_user_email_lower_uniq", violation_error_message="Email already registered"
            )
        ]

    def save(self, *args, **kwargs):
        if self.email:
            self.email = str(self.email).strip().lower()
        return super().save(*args, **kwargs)

    def has_role(self, *roles: str) -> bool:
        return self.role in roles
