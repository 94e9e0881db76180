"""
Admin interface for the component gallery.
"""
from django.contrib import admin
from .models import Comment, Component, Like, Tag, Technology


class CommentInline(admin.TabularInline):
    model = Comment
    extra = 0
    fields = ['user', 'content', 'created_at']
    readonly_fields = ['created_at']


@admin.register(Component)
class ComponentAdmin(admin.ModelAdmin):
    list_display = ['name', 'user', 'status', 'view_count', 'like_count', 'created_at', 'published_at']
    list_filter = ['status', 'technologies', 'created_at']
    search_fields = ['name', 'description', 'user__username']
    readonly_fields = ['id', 'view_count', 'created_at', 'updated_at', 'published_at']
    filter_horizontal = ['technologies', 'tags']
    inlines = [CommentInline]

    fieldsets = (
        ('Basic Info', {
            'fields': ('id', 'name', 'description', 'user', 'status')
        }),
        ('Code', {
            'fields': ('code', 'preview_url'),
            'classes': ('wide',)
        }),
        ('Links', {
            'fields': ('technologies', 'tags')
        }),
        ('Stats', {
            'fields': ('view_count', 'created_at', 'updated_at', 'published_at'),
            'classes': ('collapse',)
        }),
    )

    def like_count(self, obj):
        return obj.likes.count()
    like_count.short_description = 'Likes'


@admin.register(Technology)
class TechnologyAdmin(admin.ModelAdmin):
    list_display = ['name', 'component_count', 'created_at']
    search_fields = ['name']

    def component_count(self, obj):
        return obj.components.count()
    component_count.short_description = 'Components'


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    list_display = ['name', 'created_at']
    search_fields = ['name']


@admin.register(Like)
class LikeAdmin(admin.ModelAdmin):
    list_display = ['component', 'user', 'created_at']
    raw_id_fields = ['component', 'user']


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ['component', 'user', 'created_at']
    search_fields = ['content']
    raw_id_fields = ['component', 'user']
