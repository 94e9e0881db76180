"""
URL patterns for the component gallery API.
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import ComponentViewSet, TagViewSet, TechnologyViewSet

router = DefaultRouter()
router.register(r'components', ComponentViewSet, basename='components')
router.register(r'technologies', TechnologyViewSet, basename='technologies')
router.register(r'tags', TagViewSet, basename='tags')

urlpatterns = [
    path('', include(router.urls)),
]
