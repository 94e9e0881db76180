"""
Component gallery models - generated UI components and their tags, technologies, likes.
"""
import uuid
from django.conf import settings
from django.db import models
from django.utils import timezone


class Technology(models.Model):
    """A framework or library a component is built with (react, tailwind...)."""
    name = models.CharField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = "Technologies"
        ordering = ['name']

    def __str__(self):
        return self.name


class Tag(models.Model):
    """Free-form label shared across components."""
    name = models.CharField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name


class ComponentStatus(models.TextChoices):
    DRAFT = 'DRAFT', 'Draft'
    PUBLISHED = 'PUBLISHED', 'Published'
    ARCHIVED = 'ARCHIVED', 'Archived'


class Component(models.Model):
    """
    A UI component shared in the gallery.
    Owners can move it freely between draft, published and archived.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Basic info
    name = models.CharField(max_length=200, db_index=True)
    description = models.TextField(blank=True, null=True)

    # The actual code
    code = models.TextField(help_text="The component source code")
    preview_url = models.URLField(max_length=500, blank=True, null=True)

    status = models.CharField(
        max_length=20,
        choices=ComponentStatus.choices,
        default=ComponentStatus.DRAFT,
        db_index=True
    )
    view_count = models.PositiveIntegerField(default=0)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='components'
    )
    technologies = models.ManyToManyField(Technology, blank=True, related_name='components')
    tags = models.ManyToManyField(Tag, blank=True, related_name='components')

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    published_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'created_at'], name='component_status_created_idx'),
            models.Index(fields=['user', 'status'], name='component_user_status_idx'),
            models.Index(fields=['view_count'], name='component_view_count_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.status})"

    def set_status(self, status):
        """
        Change status. The first move into PUBLISHED stamps published_at;
        later transitions never clear or restamp it.
        """
        self.status = status
        if status == ComponentStatus.PUBLISHED and self.published_at is None:
            self.published_at = timezone.now()


class Like(models.Model):
    """At most one like per user per component."""
    component = models.ForeignKey(Component, on_delete=models.CASCADE, related_name='likes')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='likes'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['component', 'user'], name='unique_like_per_user'),
        ]

    def __str__(self):
        return f"{self.user} likes {self.component_id}"


class Comment(models.Model):
    """A comment left on a component."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    component = models.ForeignKey(Component, on_delete=models.CASCADE, related_name='comments')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='comments'
    )
    content = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['created_at']

    def __str__(self):
        preview = self.content[:50] + '...' if len(self.content) > 50 else self.content
        return f"Comment by {self.user}: {preview}"
