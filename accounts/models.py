from django.contrib.auth.models import AbstractUser
from django.db import models

class CustomUser(AbstractUser):
    business_name = models.CharField(max_length=200, blank=True, null=True)

    @property
    def display_name(self):
        """Full name, falling back to email and then username."""
        return self.get_full_name() or self.email or self.username
