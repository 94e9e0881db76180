"""
API views for the component gallery.
"""
import uuid

from django.db import transaction
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticatedOrReadOnly
from rest_framework.response import Response

from .exceptions import ComponentNotFound
from .models import Tag, Technology
from .serializers import (
    CommentSerializer,
    ComponentListQuerySerializer,
    ComponentSerializer,
    ComponentWriteSerializer,
    TagSerializer,
    TechnologySerializer,
)
from .services import ComponentFilters, ComponentService, LikeService


def _component_id(pk):
    """Malformed ids can't match any component."""
    try:
        return uuid.UUID(str(pk))
    except ValueError:
        raise ComponentNotFound()


class ComponentViewSet(viewsets.ViewSet):
    """
    Gallery components. Anyone can browse; writes need a signed-in owner.
    """
    permission_classes = [IsAuthenticatedOrReadOnly]

    component_service = ComponentService()
    like_service = LikeService()

    def list(self, request):
        query = ComponentListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        filters = ComponentFilters(
            status=params['status'],
            search=params['search'].strip(),
            technology=params.get('technology') or None,
            tag=params.get('tag') or None,
            user_id=params.get('userId'),
            sort=params['sort'],
            page=params['page'],
            page_size=params['limit'],
            random=params['random'],
        )
        page = self.component_service.list_components(filters)

        return Response({
            'components': ComponentSerializer(page.components, many=True).data,
            'totalPages': page.total_pages,
            'currentPage': page.page,
        })

    def create(self, request):
        serializer = ComponentWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        component = self.component_service.create_component(
            request.user, **serializer.validated_data
        )
        return Response(ComponentSerializer(component).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        component = self.component_service.get_component(_component_id(pk))
        return Response({'component': ComponentSerializer(component).data})

    def partial_update(self, request, pk=None):
        component_id = _component_id(pk)

        with transaction.atomic():
            # 404 and 403 take precedence over body validation
            self.component_service.get_owned(request.user, component_id)

            serializer = ComponentWriteSerializer(data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)

            component = self.component_service.update_component(
                request.user, component_id, serializer.validated_data
            )
        return Response({'component': ComponentSerializer(component).data})

    def destroy(self, request, pk=None):
        self.component_service.delete_component(request.user, _component_id(pk))
        return Response({'message': 'Component deleted'})

    @action(detail=True, methods=['get', 'post'])
    def like(self, request, pk=None):
        """GET like status, POST toggles the caller's like."""
        component_id = _component_id(pk)

        if request.method == 'POST':
            result = self.like_service.toggle(component_id, request.user)
            return Response({
                'message': 'Component liked' if result.liked else 'Like removed',
                'liked': result.liked,
                'likeCount': result.like_count,
            })

        result = self.like_service.get_status(component_id, request.user)
        return Response({'liked': result.liked, 'likeCount': result.like_count})

    @action(detail=True, methods=['get', 'post'])
    def comments(self, request, pk=None):
        component_id = _component_id(pk)

        if request.method == 'POST':
            comment = self.component_service.add_comment(
                component_id, request.user, request.data.get('content')
            )
            return Response(CommentSerializer(comment).data, status=status.HTTP_201_CREATED)

        comments = self.component_service.get_comments(component_id)
        return Response({'comments': CommentSerializer(comments, many=True).data})


class TechnologyViewSet(viewsets.ReadOnlyModelViewSet):
    """Known technologies, alphabetical."""
    serializer_class = TechnologySerializer
    permission_classes = [AllowAny]
    pagination_class = None
    queryset = Technology.objects.all().order_by('name')


class TagViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = TagSerializer
    permission_classes = [AllowAny]
    pagination_class = None
    queryset = Tag.objects.all().order_by('name')
