from rest_framework import serializers
from .models import User


class UserSummarySerializer(serializers.ModelSerializer):
    """Public owner summary embedded in component payloads."""
    class Meta:
        model = User
        fields = ['id', 'name', 'username', 'image']
        read_only_fields = fields
