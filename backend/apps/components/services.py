"""
Component gallery services: listing, CRUD, likes and comments.
"""
import logging
import math
import random
from dataclasses import dataclass
from typing import Iterable, List, Optional

from django.db import IntegrityError, transaction
from django.db.models import Count, F, Q

from . import constants
from .exceptions import (
    AuthenticationRequired,
    ComponentNotFound,
    ComponentValidationError,
    NotComponentOwner,
)
from .models import Comment, Component, ComponentStatus, Like, Tag, Technology

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ('name', 'description', 'code', 'preview_url')


def resolve_named(model, names: Iterable[str]) -> list:
    """
    Find or create Technology/Tag rows by exact name.

    Names are whitespace-trimmed; blanks and duplicates are skipped.
    get_or_create re-reads the row when a concurrent request wins the
    unique-name insert, so a conflict resolves to the existing row.
    """
    resolved = []
    seen = set()
    for raw in names or []:
        name = (raw or '').strip()
        if not name or name in seen:
            continue
        seen.add(name)
        obj, created = model.objects.get_or_create(name=name)
        if created:
            logger.info(f"Created {model.__name__.lower()} '{name}'")
        resolved.append(obj)
    return resolved


def _is_authenticated(user) -> bool:
    return user is not None and getattr(user, 'is_authenticated', False)


@dataclass
class ComponentFilters:
    """Query options for the gallery listing."""
    status: str = ComponentStatus.PUBLISHED
    search: str = ''
    technology: Optional[str] = None
    tag: Optional[str] = None
    user_id: Optional[int] = None
    sort: str = constants.DEFAULT_SORT
    page: int = 1
    page_size: int = constants.DEFAULT_PAGE_SIZE
    random: bool = False


@dataclass
class ComponentPage:
    components: List[Component]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.page_size else 0


@dataclass
class LikeStatus:
    liked: bool
    like_count: int


class ComponentService:
    """
    Service for component operations.
    """

    def get_queryset(self):
        """Components with owner, links and aggregate counts loaded."""
        return Component.objects.select_related('user').prefetch_related(
            'technologies', 'tags'
        ).annotate(
            like_count=Count('likes', distinct=True),
            comment_count=Count('comments', distinct=True),
        )

    # ============= LISTING =============

    def _filtered(self, filters: ComponentFilters):
        qs = Component.objects.all()

        if filters.status != constants.STATUS_ALL:
            qs = qs.filter(status=filters.status)

        if filters.search:
            qs = qs.filter(
                Q(name__icontains=filters.search) | Q(description__icontains=filters.search)
            )

        if filters.user_id:
            qs = qs.filter(user_id=filters.user_id)

        # Names are unique, so each filter matches at most one linked row
        if filters.technology:
            qs = qs.filter(technologies__name=filters.technology)

        if filters.tag:
            qs = qs.filter(tags__name=filters.tag)

        return qs

    def list_components(self, filters: ComponentFilters) -> ComponentPage:
        """Get one page of components matching the filters."""
        qs = self._filtered(filters)
        total = qs.count()

        detailed = self.get_queryset().filter(pk__in=qs.values('pk'))

        if filters.random:
            cap = max(constants.RANDOM_CANDIDATE_CAP, filters.page_size)
            candidates = list(detailed.order_by('-created_at')[:cap])
            random.shuffle(candidates)
            components = candidates[:filters.page_size]
        else:
            ordering = constants.SORT_ORDERINGS.get(
                filters.sort, constants.SORT_ORDERINGS[constants.DEFAULT_SORT]
            )
            offset = (filters.page - 1) * filters.page_size
            components = list(detailed.order_by(*ordering)[offset:offset + filters.page_size])

        return ComponentPage(
            components=components,
            total=total,
            page=filters.page,
            page_size=filters.page_size,
        )

    # ============= DETAIL =============

    def get_component(self, component_id) -> Component:
        """Get a component and count the view."""
        updated = Component.objects.filter(pk=component_id).update(
            view_count=F('view_count') + 1
        )
        if not updated:
            raise ComponentNotFound()
        # Deleted between the increment and the read
        component = self.get_queryset().filter(pk=component_id).first()
        if component is None:
            raise ComponentNotFound()
        return component

    def get_owned(self, requester, component_id) -> Component:
        """
        Lock a component for modification by its owner.
        Raises ComponentNotFound, then NotComponentOwner; call it before
        validating the request body.
        """
        component = Component.objects.select_for_update().filter(pk=component_id).first()
        if component is None:
            raise ComponentNotFound()
        if component.user_id != requester.pk:
            raise NotComponentOwner()
        return component

    # ============= CRUD =============

    @transaction.atomic
    def create_component(
        self,
        owner,
        name: str,
        code: str,
        description: str = None,
        preview_url: str = None,
        technologies: Iterable[str] = (),
        tags: Iterable[str] = (),
        status: str = None
    ) -> Component:
        """Create a new component owned by `owner`."""
        if not name or not code:
            raise ComponentValidationError('Component name and code are required')

        component = Component(
            user=owner,
            name=name,
            code=code,
            description=description,
            preview_url=preview_url or None,
        )
        component.set_status(status or ComponentStatus.DRAFT)
        component.save()

        component.technologies.set(resolve_named(Technology, technologies))
        component.tags.set(resolve_named(Tag, tags))

        logger.info(f"Component {component.id} created by user {owner.pk} ({component.status})")
        return self.get_queryset().get(pk=component.pk)

    @transaction.atomic
    def update_component(self, requester, component_id, patch: dict) -> Component:
        """
        Apply a partial update. Only keys present in `patch` change; supplied
        technologies/tags replace the whole link set.
        """
        component = self.get_owned(requester, component_id)

        for field in ('name', 'code'):
            if field in patch and not patch[field]:
                raise ComponentValidationError(f'Component {field} cannot be empty')

        for field in EDITABLE_FIELDS:
            if field in patch:
                setattr(component, field, patch[field])
        if 'preview_url' in patch and not patch['preview_url']:
            component.preview_url = None

        if 'status' in patch:
            previous = component.status
            component.set_status(patch['status'])
            if previous != component.status:
                logger.info(f"Component {component.id} status {previous} -> {component.status}")

        component.save()

        if 'technologies' in patch:
            component.technologies.set(resolve_named(Technology, patch['technologies']), clear=True)
        if 'tags' in patch:
            component.tags.set(resolve_named(Tag, patch['tags']), clear=True)

        return self.get_queryset().get(pk=component.pk)

    @transaction.atomic
    def delete_component(self, requester, component_id) -> None:
        """Delete a component with its likes, comments and links."""
        component = self.get_owned(requester, component_id)
        component.delete()
        logger.info(f"Component {component_id} deleted by user {requester.pk}")

    # ============= COMMENTS =============

    def get_comments(self, component_id) -> List[Comment]:
        if not Component.objects.filter(pk=component_id).exists():
            raise ComponentNotFound()
        return list(
            Comment.objects.filter(component_id=component_id).select_related('user').order_by('created_at')
        )

    def add_comment(self, component_id, user, content: str) -> Comment:
        if not _is_authenticated(user):
            raise AuthenticationRequired()
        if not Component.objects.filter(pk=component_id).exists():
            raise ComponentNotFound()
        content = (content or '').strip()
        if not content:
            raise ComponentValidationError('Comment content is required')
        return Comment.objects.create(component_id=component_id, user=user, content=content)


class LikeService:
    """
    Toggle likes. Uniqueness per (component, user) is enforced by the
    database constraint, not by locking.
    """

    def _ensure_exists(self, component_id):
        if not Component.objects.filter(pk=component_id).exists():
            raise ComponentNotFound()

    def _count(self, component_id) -> int:
        return Like.objects.filter(component_id=component_id).count()

    def get_status(self, component_id, viewer=None) -> LikeStatus:
        """Like count plus whether `viewer` (if signed in) has liked it."""
        self._ensure_exists(component_id)

        liked = False
        if _is_authenticated(viewer):
            liked = Like.objects.filter(component_id=component_id, user=viewer).exists()

        return LikeStatus(liked=liked, like_count=self._count(component_id))

    @transaction.atomic
    def toggle(self, component_id, user) -> LikeStatus:
        """Remove the user's like if present, otherwise add one."""
        if not _is_authenticated(user):
            raise AuthenticationRequired()
        self._ensure_exists(component_id)

        deleted, _ = Like.objects.filter(component_id=component_id, user=user).delete()
        if deleted:
            liked = False
        else:
            try:
                with transaction.atomic():
                    Like.objects.create(component_id=component_id, user=user)
            except IntegrityError:
                # A concurrent toggle already inserted the same pair
                logger.info(f"Duplicate like ignored for component {component_id}, user {user.pk}")
            liked = True

        logger.info(f"User {user.pk} {'liked' if liked else 'unliked'} component {component_id}")
        return LikeStatus(liked=liked, like_count=self._count(component_id))
