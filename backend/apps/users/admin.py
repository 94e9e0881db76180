from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import User


@admin.register(User)
class CustomUserAdmin(UserAdmin):
    list_display = ['username', 'name', 'email', 'component_count', 'created_at']
    list_filter = ['is_staff', 'is_superuser', 'is_active', 'created_at']
    search_fields = ['username', 'name', 'email']
    fieldsets = UserAdmin.fieldsets + (
        ('Profile', {'fields': ('name', 'image')}),
    )
    add_fieldsets = UserAdmin.add_fieldsets + (
        ('Profile', {'fields': ('name', 'email', 'image')}),
    )

    def component_count(self, obj):
        return obj.components.count()
