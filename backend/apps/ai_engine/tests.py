"""
Tests for component generation and its fallback tiers.

Run: python manage.py test apps.ai_engine
"""
from unittest.mock import MagicMock, patch

import requests
from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APIClient

from .ai_client import GeminiClient
from .exceptions import GeminiAPIError, GeminiConfigurationError
from .generators import (
    ComponentGenerator,
    OfflineFallback,
    RepairedSuccess,
    Success,
    offline_fallback,
    parse_model_response,
    repair_model_response,
)
from .prompts import build_component_prompt


def gemini_reply(text):
    response = MagicMock()
    response.raise_for_status.return_value = None
    response.json.return_value = {
        'candidates': [{'content': {'parts': [{'text': text}]}}],
        'usageMetadata': {'totalTokenCount': 42},
    }
    return response


class PromptTest(TestCase):

    def test_embeds_prompt_and_technologies(self):
        text = build_component_prompt('a pricing table', ['Vue', 'Bootstrap'])
        self.assertIn('"a pricing table"', text)
        self.assertIn('Vue, Bootstrap', text)
        self.assertIn('"code"', text)

    def test_default_technologies(self):
        self.assertIn('React, Tailwind CSS', build_component_prompt('x', []))


class ParseModelResponseTest(TestCase):

    def test_json_inside_prose(self):
        text = 'Sure! {"name": "Hero", "description": "Big banner", "code": "<section />"} Enjoy.'
        result = parse_model_response(text)
        self.assertIsInstance(result, Success)
        self.assertEqual(result.to_payload(), {
            'name': 'Hero', 'description': 'Big banner', 'code': '<section />'
        })

    def test_missing_description_defaults_to_empty(self):
        result = parse_model_response('{"name": "Hero", "code": "<section />"}')
        self.assertEqual(result.description, '')

    def test_rejects_missing_fields(self):
        self.assertIsNone(parse_model_response('{"name": "Hero"}'))
        self.assertIsNone(parse_model_response('{"name": "", "code": "x"}'))

    def test_rejects_invalid_json(self):
        self.assertIsNone(parse_model_response('{name: Hero}'))
        self.assertIsNone(parse_model_response('no braces at all'))


class RepairModelResponseTest(TestCase):

    def test_first_fenced_block_without_language_tag(self):
        text = "Here you go:\n```tsx\nconst A = () => <div />;\n```\nand\n```js\nother()\n```"
        result = repair_model_response(text)
        self.assertIsInstance(result, RepairedSuccess)
        self.assertEqual(result.name, 'GeneratedComponent')
        self.assertEqual(result.code, 'const A = () => <div />;')

    def test_raw_text_without_fence(self):
        result = repair_model_response('const B = () => null;')
        self.assertEqual(result.code, 'const B = () => null;')

    def test_blank_reply(self):
        self.assertIsNone(repair_model_response('   '))
        self.assertIsNone(repair_model_response('```\n```'))


class OfflineFallbackTest(TestCase):

    def test_keyword_families(self):
        cases = {
            'a shiny button': 'GradientButton',
            'oluştur bir buton': 'GradientButton',
            'profile CARD': 'FeatureCard',
            'bir kart yap': 'FeatureCard',
            'email input': 'FormInput',
            'signup form': 'FormInput',
            'a navbar': 'AnimatedComponent',
        }
        for prompt, expected in cases.items():
            with self.subTest(prompt=prompt):
                self.assertEqual(offline_fallback(prompt, []).name, expected)

    def test_button_wins_over_card(self):
        self.assertEqual(offline_fallback('card with a button', []).name, 'GradientButton')

    def test_typescript_variant(self):
        typed = offline_fallback('button', ['react', 'TypeScript'])
        untyped = offline_fallback('button', ['react'])
        self.assertIn('interface GradientButtonProps', typed.code)
        self.assertNotIn('interface', untyped.code)
        self.assertEqual(typed.code, typed.code.strip())

    def test_deterministic(self):
        first = offline_fallback('oluştur bir buton', [])
        second = offline_fallback('oluştur bir buton', [])
        self.assertIsInstance(first, OfflineFallback)
        self.assertEqual(first.to_payload(), second.to_payload())


@override_settings(GEMINI_API_KEY='test-key', GEMINI_MODEL='gemini-test', GEMINI_TIMEOUT=5)
class GeminiClientTest(TestCase):

    @patch('apps.ai_engine.ai_client.requests.post')
    def test_returns_candidate_text(self, mock_post):
        mock_post.return_value = gemini_reply('hello')
        self.assertEqual(GeminiClient().generate_text('hi'), 'hello')

        args, kwargs = mock_post.call_args
        self.assertIn('gemini-test:generateContent', args[0])
        self.assertEqual(kwargs['params'], {'key': 'test-key'})
        self.assertEqual(kwargs['timeout'], 5)

    @patch('apps.ai_engine.ai_client.requests.post')
    def test_network_error(self, mock_post):
        mock_post.side_effect = requests.ConnectionError('down')
        with self.assertRaises(GeminiAPIError):
            GeminiClient().generate_text('hi')

    @patch('apps.ai_engine.ai_client.requests.post')
    def test_malformed_envelope(self, mock_post):
        response = gemini_reply('unused')
        response.json.return_value = {'candidates': []}
        mock_post.return_value = response
        with self.assertRaises(GeminiAPIError):
            GeminiClient().generate_text('hi')

    @patch('apps.ai_engine.ai_client.requests.post')
    def test_non_text_part(self, mock_post):
        mock_post.return_value = gemini_reply({'nested': True})
        with self.assertRaises(GeminiAPIError):
            GeminiClient().generate_text('hi')

    def test_missing_api_key(self):
        with self.assertRaises(GeminiConfigurationError):
            GeminiClient(api_key='').generate_text('hi')


class ComponentGeneratorTest(TestCase):

    def generator(self, reply=None, error=None):
        client = MagicMock()
        if error is not None:
            client.generate_text.side_effect = error
        else:
            client.generate_text.return_value = reply
        return ComponentGenerator(client=client)

    def test_success_tier(self):
        result = self.generator('{"name": "Hero", "code": "<section />"}').generate('hero', [])
        self.assertIsInstance(result, Success)

    def test_repaired_tier(self):
        result = self.generator('```jsx\n<div />\n```').generate('hero', [])
        self.assertIsInstance(result, RepairedSuccess)
        self.assertEqual(result.code, '<div />')

    def test_offline_tier_on_api_error(self):
        result = self.generator(error=GeminiAPIError('boom')).generate('oluştur bir buton', [])
        self.assertIsInstance(result, OfflineFallback)
        self.assertEqual(result.name, 'GradientButton')

    def test_offline_tier_on_blank_reply(self):
        result = self.generator('   ').generate('a form', ['typescript'])
        self.assertIsInstance(result, OfflineFallback)
        self.assertIn('interface FormInputProps', result.code)

    @patch('apps.ai_engine.ai_client.requests.post')
    def test_offline_tier_on_non_text_part(self, mock_post):
        mock_post.return_value = gemini_reply(['not', 'text'])
        generator = ComponentGenerator(client=GeminiClient(api_key='test-key'))
        result = generator.generate('a card', [])
        self.assertIsInstance(result, OfflineFallback)
        self.assertEqual(result.name, 'FeatureCard')


class GenerateCodeAPITest(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.user = get_user_model().objects.create_user(username='maker', password='pw')
        self.url = '/api/ai/generate-code/'

    def test_requires_auth(self):
        response = self.client.post(self.url, {'prompt': 'button'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_requires_prompt(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.post(self.url, {'technologies': ['react']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': 'prompt is required'})

    @override_settings(GEMINI_API_KEY='')
    def test_falls_back_without_api_key(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.post(
            self.url, {'prompt': 'oluştur bir buton', 'technologies': []}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], 'GradientButton')
        self.assertEqual(set(response.data), {'name', 'description', 'code'})

    @override_settings(GEMINI_API_KEY='test-key')
    @patch('apps.ai_engine.ai_client.requests.post')
    def test_model_reply(self, mock_post):
        mock_post.return_value = gemini_reply(
            '{"name": "PricingTable", "description": "Three tiers", "code": "<table />"}'
        )
        self.client.force_authenticate(user=self.user)
        response = self.client.post(
            self.url, {'prompt': 'pricing table', 'technologies': ['react']}, format='json'
        )
        self.assertEqual(response.data, {
            'name': 'PricingTable', 'description': 'Three tiers', 'code': '<table />'
        })
