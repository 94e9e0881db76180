"""
Serializers for the component gallery API.

Wire names are camelCase (previewUrl, viewCount...) to match the frontend.
"""
from rest_framework import serializers

from apps.users.serializers import UserSummarySerializer

from . import constants
from .models import Comment, Component, ComponentStatus, Tag, Technology


class TechnologySerializer(serializers.ModelSerializer):
    class Meta:
        model = Technology
        fields = ['id', 'name']


class TagSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tag
        fields = ['id', 'name']


class ComponentSerializer(serializers.ModelSerializer):
    """Full component payload with owner, links and counts."""

    previewUrl = serializers.CharField(source='preview_url', read_only=True, allow_null=True)
    viewCount = serializers.IntegerField(source='view_count', read_only=True)
    userId = serializers.IntegerField(source='user_id', read_only=True)
    user = UserSummarySerializer(read_only=True)
    technologies = TechnologySerializer(many=True, read_only=True)
    tags = TagSerializer(many=True, read_only=True)
    likeCount = serializers.SerializerMethodField()
    commentCount = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)
    publishedAt = serializers.DateTimeField(source='published_at', read_only=True)

    class Meta:
        model = Component
        fields = [
            'id', 'name', 'description', 'code', 'previewUrl', 'status',
            'viewCount', 'userId', 'user', 'technologies', 'tags',
            'likeCount', 'commentCount',
            'createdAt', 'updatedAt', 'publishedAt',
        ]

    def get_likeCount(self, obj):
        count = getattr(obj, 'like_count', None)
        return obj.likes.count() if count is None else count

    def get_commentCount(self, obj):
        count = getattr(obj, 'comment_count', None)
        return obj.comments.count() if count is None else count


class ComponentWriteSerializer(serializers.Serializer):
    """
    Request body for create (full) and update (partial=True).
    validated_data uses model field names so it can go straight to the service.
    """
    name = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    code = serializers.CharField(trim_whitespace=False)
    previewUrl = serializers.URLField(
        source='preview_url', max_length=500,
        required=False, allow_blank=True, allow_null=True
    )
    technologies = serializers.ListField(
        child=serializers.CharField(max_length=100), required=False
    )
    tags = serializers.ListField(
        child=serializers.CharField(max_length=100), required=False
    )
    status = serializers.ChoiceField(choices=ComponentStatus.choices, required=False)

    def validate_code(self, value):
        if not value.strip():
            raise serializers.ValidationError('This field may not be blank.')
        return value


class ComponentListQuerySerializer(serializers.Serializer):
    """Query string of the gallery listing."""
    status = serializers.ChoiceField(
        choices=[constants.STATUS_ALL] + list(ComponentStatus.values),
        required=False,
        default=ComponentStatus.PUBLISHED
    )
    page = serializers.IntegerField(min_value=1, required=False, default=1)
    limit = serializers.IntegerField(
        min_value=1, max_value=constants.MAX_PAGE_SIZE,
        required=False, default=constants.DEFAULT_PAGE_SIZE
    )
    search = serializers.CharField(required=False, allow_blank=True, default='')
    technology = serializers.CharField(required=False, allow_blank=True)
    tag = serializers.CharField(required=False, allow_blank=True)
    # Unknown sort keys fall back to newest
    sort = serializers.CharField(required=False, default=constants.DEFAULT_SORT)
    userId = serializers.IntegerField(required=False, min_value=1)
    random = serializers.BooleanField(required=False, default=False)


class CommentSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)
    componentId = serializers.UUIDField(source='component_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Comment
        fields = ['id', 'componentId', 'user', 'content', 'createdAt']
        read_only_fields = ['id']
