"""
Tests for the component gallery.

Run: python manage.py test apps.components
"""
import uuid
from datetime import timedelta
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from . import constants
from .exceptions import (
    AuthenticationRequired,
    ComponentNotFound,
    ComponentValidationError,
    NotComponentOwner,
)
from .models import Comment, Component, ComponentStatus, Like, Tag, Technology
from .services import ComponentFilters, ComponentService, LikeService, resolve_named

User = get_user_model()


def make_component(user, name='Button', status=ComponentStatus.PUBLISHED, **kwargs):
    component = Component(user=user, name=name, code=kwargs.pop('code', '<button />'), **kwargs)
    component.set_status(status)
    component.save()
    return component


class ResolveNamedTest(TestCase):
    """Find-or-create for technologies and tags."""

    def test_creates_missing_rows(self):
        tags = resolve_named(Tag, ['ui', 'forms'])
        self.assertEqual(sorted(t.name for t in tags), ['forms', 'ui'])
        self.assertEqual(Tag.objects.count(), 2)

    def test_reuses_existing_rows(self):
        existing = Tag.objects.create(name='ui')
        tags = resolve_named(Tag, ['ui'])
        self.assertEqual(tags, [existing])
        self.assertEqual(Tag.objects.count(), 1)

    def test_skips_blank_and_duplicate_names(self):
        tags = resolve_named(Tag, ['  ui ', 'ui', '', '   '])
        self.assertEqual([t.name for t in tags], ['ui'])

    def test_seeded_technologies_are_reused(self):
        before = Technology.objects.count()
        resolve_named(Technology, ['react', 'tailwind', 'typescript'])
        self.assertEqual(Technology.objects.count(), before)


class ComponentModelTest(TestCase):

    def setUp(self):
        self.user = User.objects.create_user(username='ada', password='pw')

    def test_draft_has_no_published_at(self):
        component = make_component(self.user, status=ComponentStatus.DRAFT)
        self.assertIsNone(component.published_at)

    def test_publish_stamp_is_kept_across_transitions(self):
        component = make_component(self.user, status=ComponentStatus.PUBLISHED)
        stamp = component.published_at
        self.assertIsNotNone(stamp)

        for next_status in (ComponentStatus.DRAFT, ComponentStatus.ARCHIVED, ComponentStatus.PUBLISHED):
            component.set_status(next_status)
            component.save()
            component.refresh_from_db()
            self.assertEqual(component.published_at, stamp)

    def test_like_is_unique_per_user(self):
        component = make_component(self.user)
        Like.objects.create(component=component, user=self.user)
        with self.assertRaises(IntegrityError), transaction.atomic():
            Like.objects.create(component=component, user=self.user)


class ComponentServiceTest(TestCase):
    """CRUD, listing and ownership rules."""

    def setUp(self):
        self.service = ComponentService()
        self.owner = User.objects.create_user(username='owner', password='pw')
        self.other = User.objects.create_user(username='other', password='pw')

    def test_create_links_technologies_and_tags(self):
        component = self.service.create_component(
            self.owner, name='Card', code='<div />',
            technologies=['react', 'svelte'], tags=['layout'],
        )
        self.assertEqual(component.status, ComponentStatus.DRAFT)
        self.assertIsNone(component.published_at)
        self.assertEqual(
            sorted(component.technologies.values_list('name', flat=True)),
            ['react', 'svelte']
        )
        self.assertEqual(list(component.tags.values_list('name', flat=True)), ['layout'])
        self.assertTrue(Technology.objects.filter(name='svelte').exists())

    def test_create_published_stamps_published_at(self):
        component = self.service.create_component(
            self.owner, name='Card', code='<div />', status=ComponentStatus.PUBLISHED
        )
        self.assertIsNotNone(component.published_at)

    def test_create_requires_name_and_code(self):
        with self.assertRaises(ComponentValidationError):
            self.service.create_component(self.owner, name='', code='<div />')
        with self.assertRaises(ComponentValidationError):
            self.service.create_component(self.owner, name='Card', code='')

    def test_get_counts_each_view(self):
        component = make_component(self.owner)
        for _ in range(5):
            fetched = self.service.get_component(component.pk)
        self.assertEqual(fetched.view_count, 5)
        component.refresh_from_db()
        self.assertEqual(component.view_count, 5)

    def test_get_missing_component(self):
        with self.assertRaises(ComponentNotFound):
            self.service.get_component(uuid.uuid4())

    def test_get_component_deleted_after_increment(self):
        component = make_component(self.owner)
        with patch.object(ComponentService, 'get_queryset', return_value=Component.objects.none()):
            with self.assertRaises(ComponentNotFound):
                self.service.get_component(component.pk)

    def test_update_changes_only_supplied_fields(self):
        component = make_component(self.owner, name='Old', description='keep me')
        updated = self.service.update_component(self.owner, component.pk, {'name': 'New'})
        self.assertEqual(updated.name, 'New')
        self.assertEqual(updated.description, 'keep me')
        self.assertEqual(updated.code, '<button />')

    def test_update_replaces_technology_links(self):
        component = self.service.create_component(
            self.owner, name='Card', code='<div />', technologies=['react', 'tailwind']
        )
        updated = self.service.update_component(
            self.owner, component.pk, {'technologies': ['vue']}
        )
        self.assertEqual(list(updated.technologies.values_list('name', flat=True)), ['vue'])

    def test_update_with_empty_list_clears_links(self):
        component = self.service.create_component(
            self.owner, name='Card', code='<div />', tags=['a', 'b']
        )
        updated = self.service.update_component(self.owner, component.pk, {'tags': []})
        self.assertEqual(updated.tags.count(), 0)
        self.assertEqual(Tag.objects.count(), 2)

    def test_update_rejects_blank_name(self):
        component = make_component(self.owner)
        with self.assertRaises(ComponentValidationError):
            self.service.update_component(self.owner, component.pk, {'name': ''})

    def test_update_by_non_owner_is_forbidden(self):
        component = make_component(self.owner, name='Mine')
        with self.assertRaises(NotComponentOwner):
            self.service.update_component(self.other, component.pk, {'name': 'Stolen'})
        component.refresh_from_db()
        self.assertEqual(component.name, 'Mine')

    def test_update_status_keeps_first_publish_stamp(self):
        component = self.service.create_component(
            self.owner, name='Card', code='<div />', status=ComponentStatus.PUBLISHED
        )
        stamp = component.published_at
        self.service.update_component(self.owner, component.pk, {'status': ComponentStatus.ARCHIVED})
        updated = self.service.update_component(
            self.owner, component.pk, {'status': ComponentStatus.PUBLISHED}
        )
        self.assertEqual(updated.published_at, stamp)

    def test_delete_cascades_but_keeps_shared_rows(self):
        component = self.service.create_component(
            self.owner, name='Card', code='<div />', technologies=['react'], tags=['ui']
        )
        Like.objects.create(component=component, user=self.other)
        Comment.objects.create(component=component, user=self.other, content='Nice')

        self.service.delete_component(self.owner, component.pk)

        self.assertFalse(Component.objects.filter(pk=component.pk).exists())
        self.assertEqual(Like.objects.count(), 0)
        self.assertEqual(Comment.objects.count(), 0)
        self.assertTrue(Technology.objects.filter(name='react').exists())
        self.assertTrue(Tag.objects.filter(name='ui').exists())

    def test_delete_by_non_owner_is_forbidden(self):
        component = make_component(self.owner)
        with self.assertRaises(NotComponentOwner):
            self.service.delete_component(self.other, component.pk)
        self.assertTrue(Component.objects.filter(pk=component.pk).exists())

    def test_delete_missing_component(self):
        with self.assertRaises(ComponentNotFound):
            self.service.delete_component(self.owner, uuid.uuid4())

    def test_comment_requires_content(self):
        component = make_component(self.owner)
        with self.assertRaises(ComponentValidationError):
            self.service.add_comment(component.pk, self.other, '   ')

    def test_comment_requires_user(self):
        component = make_component(self.owner)
        with self.assertRaises(AuthenticationRequired):
            self.service.add_comment(component.pk, None, 'Hello')


class ComponentListingTest(TestCase):
    """Filtering, sorting, paging and random sampling."""

    def setUp(self):
        self.service = ComponentService()
        self.user = User.objects.create_user(username='ada', password='pw')
        self.other = User.objects.create_user(username='bob', password='pw')

    def _age(self, component, days):
        Component.objects.filter(pk=component.pk).update(
            created_at=timezone.now() - timedelta(days=days)
        )

    def test_defaults_to_published_only(self):
        make_component(self.user, name='Shown')
        make_component(self.user, name='Hidden', status=ComponentStatus.DRAFT)
        page = self.service.list_components(ComponentFilters())
        self.assertEqual([c.name for c in page.components], ['Shown'])
        self.assertEqual(page.total, 1)

    def test_all_statuses_for_one_user(self):
        make_component(self.user, name='A', status=ComponentStatus.DRAFT)
        make_component(self.user, name='B', status=ComponentStatus.ARCHIVED)
        make_component(self.other, name='C')
        page = self.service.list_components(
            ComponentFilters(status=constants.STATUS_ALL, user_id=self.user.pk)
        )
        self.assertEqual(sorted(c.name for c in page.components), ['A', 'B'])

    def test_search_matches_name_or_description(self):
        make_component(self.user, name='Gradient Button')
        make_component(self.user, name='Card', description='has a BUTTON inside')
        make_component(self.user, name='Input')
        page = self.service.list_components(ComponentFilters(search='button'))
        self.assertEqual(page.total, 2)

    def test_technology_and_tag_filters(self):
        first = make_component(self.user, name='First')
        first.technologies.set(resolve_named(Technology, ['react']))
        first.tags.set(resolve_named(Tag, ['forms']))
        second = make_component(self.user, name='Second')
        second.technologies.set(resolve_named(Technology, ['react']))

        by_tech = self.service.list_components(ComponentFilters(technology='react'))
        self.assertEqual(by_tech.total, 2)
        by_tag = self.service.list_components(ComponentFilters(tag='forms'))
        self.assertEqual([c.name for c in by_tag.components], ['First'])

    def test_sorts(self):
        old = make_component(self.user, name='Beta')
        make_component(self.user, name='Alpha')
        self._age(old, 3)
        Component.objects.filter(pk=old.pk).update(view_count=10)

        def names(sort):
            page = self.service.list_components(ComponentFilters(sort=sort))
            return [c.name for c in page.components]

        self.assertEqual(names('newest'), ['Alpha', 'Beta'])
        self.assertEqual(names('oldest'), ['Beta', 'Alpha'])
        self.assertEqual(names('popular'), ['Beta', 'Alpha'])
        self.assertEqual(names('name'), ['Alpha', 'Beta'])
        self.assertEqual(names('bogus'), ['Alpha', 'Beta'])

    def test_pagination(self):
        for i in range(25):
            component = make_component(self.user, name=f'C{i:02d}')
            self._age(component, 25 - i)

        page = self.service.list_components(ComponentFilters(page=3, page_size=10))
        self.assertEqual(page.total_pages, 3)
        self.assertEqual(page.page, 3)
        self.assertEqual([c.name for c in page.components], [f'C{i:02d}' for i in range(4, -1, -1)])

    def test_random_returns_distinct_page(self):
        for i in range(20):
            make_component(self.user, name=f'R{i}')
        page = self.service.list_components(ComponentFilters(random=True, page_size=6))
        ids = [c.pk for c in page.components]
        self.assertEqual(len(ids), 6)
        self.assertEqual(len(set(ids)), 6)

    def test_counts_are_annotated(self):
        component = make_component(self.user)
        Like.objects.create(component=component, user=self.other)
        Comment.objects.create(component=component, user=self.other, content='hi')
        Comment.objects.create(component=component, user=self.user, content='thanks')
        listed = self.service.list_components(ComponentFilters()).components[0]
        self.assertEqual(listed.like_count, 1)
        self.assertEqual(listed.comment_count, 2)


class LikeServiceTest(TestCase):

    def setUp(self):
        self.service = LikeService()
        self.owner = User.objects.create_user(username='owner', password='pw')
        self.fan = User.objects.create_user(username='fan', password='pw')
        self.component = make_component(self.owner)

    def test_double_toggle_restores_state(self):
        before = self.service.get_status(self.component.pk, self.fan)

        first = self.service.toggle(self.component.pk, self.fan)
        self.assertTrue(first.liked)
        self.assertEqual(first.like_count, before.like_count + 1)

        second = self.service.toggle(self.component.pk, self.fan)
        self.assertEqual(second.liked, before.liked)
        self.assertEqual(second.like_count, before.like_count)

    def test_anonymous_status_is_not_liked(self):
        Like.objects.create(component=self.component, user=self.fan)
        result = self.service.get_status(self.component.pk, None)
        self.assertFalse(result.liked)
        self.assertEqual(result.like_count, 1)

    def test_toggle_requires_user(self):
        with self.assertRaises(AuthenticationRequired):
            self.service.toggle(self.component.pk, None)

    def test_missing_component(self):
        with self.assertRaises(ComponentNotFound):
            self.service.get_status(uuid.uuid4())
        with self.assertRaises(ComponentNotFound):
            self.service.toggle(uuid.uuid4(), self.fan)


class ComponentAPITest(TestCase):
    """HTTP surface: envelopes, status codes, auth precedence."""

    def setUp(self):
        self.client = APIClient()
        self.owner = User.objects.create_user(username='owner', password='pw', name='Owner')
        self.other = User.objects.create_user(username='other', password='pw')
        self.component = make_component(self.owner, name='Gradient Button')

    def url(self, pk=None, suffix=''):
        if pk is None:
            return '/api/components/'
        return f'/api/components/{pk}/{suffix}'

    def test_list_envelope(self):
        response = self.client.get(self.url(), {'limit': 5})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['totalPages'], 1)
        self.assertEqual(response.data['currentPage'], 1)
        item = response.data['components'][0]
        self.assertEqual(item['name'], 'Gradient Button')
        self.assertEqual(item['userId'], self.owner.pk)
        self.assertEqual(item['user']['name'], 'Owner')
        self.assertEqual(item['likeCount'], 0)

    def test_list_random_query(self):
        for i in range(20):
            make_component(self.owner, name=f'R{i}')
        response = self.client.get(self.url(), {'random': 'true', 'limit': 6})
        ids = {c['id'] for c in response.data['components']}
        self.assertEqual(len(ids), 6)

    def test_list_invalid_status(self):
        response = self.client.get(self.url(), {'status': 'DELETED'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)

    def test_create_requires_auth(self):
        response = self.client.post(self.url(), {'name': 'X', 'code': 'y'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertIn('error', response.data)

    def test_create(self):
        self.client.force_authenticate(user=self.owner)
        response = self.client.post(self.url(), {
            'name': 'Card',
            'code': '<div />',
            'previewUrl': 'https://example.com/card.png',
            'technologies': ['react', 'typescript'],
            'tags': ['layout'],
            'status': 'PUBLISHED',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'PUBLISHED')
        self.assertIsNotNone(response.data['publishedAt'])
        self.assertEqual(response.data['previewUrl'], 'https://example.com/card.png')
        self.assertEqual(
            sorted(t['name'] for t in response.data['technologies']),
            ['react', 'typescript']
        )

    def test_create_missing_code(self):
        self.client.force_authenticate(user=self.owner)
        response = self.client.post(self.url(), {'name': 'Card'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(response.data['error'].startswith('code'))

    def test_retrieve_counts_views(self):
        for expected in (1, 2, 3):
            response = self.client.get(self.url(self.component.pk))
            self.assertEqual(response.status_code, status.HTTP_200_OK)
            self.assertEqual(response.data['component']['viewCount'], expected)

    def test_retrieve_unknown_and_malformed_ids(self):
        response = self.client.get(self.url(uuid.uuid4()))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {'error': 'Component not found'})

        response = self.client.get(self.url('not-a-uuid'))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_patch_precedence(self):
        missing = uuid.uuid4()

        # Unauthenticated beats not found
        response = self.client.patch(self.url(missing), {'name': 'X'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

        self.client.force_authenticate(user=self.other)
        response = self.client.patch(self.url(missing), {'name': 'X'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

        response = self.client.patch(self.url(self.component.pk), {'name': 'X'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.component.refresh_from_db()
        self.assertEqual(self.component.name, 'Gradient Button')

    def test_patch_precedence_over_invalid_body(self):
        missing = uuid.uuid4()

        response = self.client.patch(self.url(missing), {'status': 'BOGUS'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

        self.client.force_authenticate(user=self.other)
        response = self.client.patch(self.url(missing), {'status': 'BOGUS'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

        response = self.client.patch(self.url(self.component.pk), {'name': ''}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        # The owner still gets the validation error
        self.client.force_authenticate(user=self.owner)
        response = self.client.patch(self.url(self.component.pk), {'name': ''}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.component.refresh_from_db()
        self.assertEqual(self.component.name, 'Gradient Button')

    def test_patch_by_owner(self):
        self.client.force_authenticate(user=self.owner)
        response = self.client.patch(
            self.url(self.component.pk),
            {'description': 'Shiny', 'tags': ['buttons']},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.data['component']
        self.assertEqual(body['description'], 'Shiny')
        self.assertEqual(body['name'], 'Gradient Button')
        self.assertEqual([t['name'] for t in body['tags']], ['buttons'])

    def test_delete(self):
        response = self.client.delete(self.url(uuid.uuid4()))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

        self.client.force_authenticate(user=self.other)
        response = self.client.delete(self.url(uuid.uuid4()))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

        response = self.client.delete(self.url(self.component.pk))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(user=self.owner)
        response = self.client.delete(self.url(self.component.pk))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Component deleted')
        self.assertFalse(Component.objects.filter(pk=self.component.pk).exists())

    def test_like_toggle(self):
        response = self.client.post(self.url(self.component.pk, 'like/'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

        self.client.force_authenticate(user=self.other)
        response = self.client.post(self.url(self.component.pk, 'like/'))
        self.assertEqual(response.data, {'message': 'Component liked', 'liked': True, 'likeCount': 1})

        response = self.client.get(self.url(self.component.pk, 'like/'))
        self.assertEqual(response.data, {'liked': True, 'likeCount': 1})

        response = self.client.post(self.url(self.component.pk, 'like/'))
        self.assertEqual(response.data, {'message': 'Like removed', 'liked': False, 'likeCount': 0})

    def test_anonymous_like_status(self):
        Like.objects.create(component=self.component, user=self.other)
        response = self.client.get(self.url(self.component.pk, 'like/'))
        self.assertEqual(response.data, {'liked': False, 'likeCount': 1})

    def test_comments(self):
        self.client.force_authenticate(user=self.other)
        response = self.client.post(
            self.url(self.component.pk, 'comments/'), {'content': 'Love it'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['content'], 'Love it')

        response = self.client.post(
            self.url(self.component.pk, 'comments/'), {'content': ''}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        self.client.force_authenticate(user=None)
        response = self.client.get(self.url(self.component.pk, 'comments/'))
        self.assertEqual([c['content'] for c in response.data['comments']], ['Love it'])

        detail = self.client.get(self.url(self.component.pk))
        self.assertEqual(detail.data['component']['commentCount'], 1)


class TechnologyAPITest(TestCase):

    def test_technologies_sorted_by_name(self):
        Technology.objects.create(name='angular')
        response = APIClient().get('/api/technologies/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        names = [t['name'] for t in response.data]
        self.assertEqual(names, sorted(names))
        self.assertIn('angular', names)
        self.assertIn('react', names)

    def test_tags_listing(self):
        Tag.objects.create(name='forms')
        response = APIClient().get('/api/tags/')
        self.assertEqual([t['name'] for t in response.data], ['forms'])
