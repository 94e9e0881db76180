from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    Account created by the external identity provider.
    The component core reads it but never mutates it.
    """
    name = models.CharField(max_length=150, blank=True)
    image = models.URLField(max_length=500, blank=True, help_text='Avatar URL from the identity provider')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.username

    class Meta:
        ordering = ['-created_at']
