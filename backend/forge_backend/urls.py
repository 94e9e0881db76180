"""
URL configuration for forge_backend project.
"""
from django.contrib import admin
from django.urls import path, include
from django.http import JsonResponse


def health_check(request):
    """Health check endpoint for Render.com"""
    return JsonResponse({'status': 'healthy', 'service': 'forge-api'})


urlpatterns = [
    path('api/health/', health_check, name='health_check'),
    path('admin/', admin.site.urls),
    path('api/auth/', include('apps.users.urls')),
    path('api/ai/', include('apps.ai_engine.urls')),  # Component generation
    path('api/', include('apps.components.urls')),  # Components, technologies, tags
]
