"""
Component generation with tiered fallbacks.

1. Success          - the model replied with the JSON object we asked for
2. RepairedSuccess  - the reply was unusable as JSON; code recovered from raw text
3. OfflineFallback  - the model call failed; a canned template is returned
"""
import json
import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from .ai_client import GeminiClient
from .exceptions import GenerationError
from .fallback_templates import select_template
from .prompts import build_component_prompt

logger = logging.getLogger(__name__)

JSON_OBJECT_RE = re.compile(r'\{[\s\S]*\}')
FENCE_LANGUAGE_RE = re.compile(r'^(jsx|tsx|javascript|typescript|js|ts)\n')
CODE_FENCE = '```'

REPAIRED_NAME = "GeneratedComponent"
REPAIRED_DESCRIPTION = "Component generated by Gemini"


@dataclass
class GenerationResult:
    name: str
    description: str
    code: str

    tier = 'unknown'

    def to_payload(self) -> dict:
        return {
            'name': self.name,
            'description': self.description,
            'code': self.code,
        }


class Success(GenerationResult):
    tier = 'success'


class RepairedSuccess(GenerationResult):
    tier = 'repaired'


class OfflineFallback(GenerationResult):
    tier = 'offline'


def parse_model_response(text: str) -> Optional[Success]:
    """
    Take the first `{` through the last `}` of the reply and read it as the
    component JSON. Returns None unless it has non-empty name and code.
    """
    match = JSON_OBJECT_RE.search(text or '')
    if not match:
        return None

    try:
        data = json.loads(match.group(0))
    except ValueError:
        return None

    if not isinstance(data, dict):
        return None

    name = data.get('name')
    code = data.get('code')
    if not isinstance(name, str) or not name.strip():
        return None
    if not isinstance(code, str) or not code.strip():
        return None

    description = data.get('description') or ''
    return Success(name=name, description=str(description), code=code)


def repair_model_response(text: str) -> Optional[RepairedSuccess]:
    """
    Use the first fenced block of the reply as code, or the whole reply
    when there is no fence. Returns None if nothing usable is left.
    """
    text = text or ''
    if CODE_FENCE in text:
        code = text.split(CODE_FENCE)[1]
        code = FENCE_LANGUAGE_RE.sub('', code, count=1)
    else:
        code = text

    code = code.strip()
    if not code:
        return None
    return RepairedSuccess(name=REPAIRED_NAME, description=REPAIRED_DESCRIPTION, code=code)


def offline_fallback(prompt: str, technologies: List[str]) -> OfflineFallback:
    """Pick a template by prompt keywords; typed variant when typescript is requested."""
    template = select_template(prompt)
    typescript = any((tech or '').lower() == 'typescript' for tech in technologies or [])
    return OfflineFallback(
        name=template.name,
        description=template.description,
        code=template.code_for(typescript),
    )


class ComponentGenerator:
    """Generate a component from a natural-language prompt"""

    def __init__(self, client=None):
        self.client = client or GeminiClient()

    def generate(self, prompt: str, technologies: List[str] = None) -> GenerationResult:
        """
        Always returns a result; failures degrade through the fallback tiers.
        """
        technologies = technologies or []

        try:
            text = self.client.generate_text(build_component_prompt(prompt, technologies))
        except GenerationError as e:
            logger.warning(f"Gemini unavailable, using offline template: {e}")
            return offline_fallback(prompt, technologies)

        result = parse_model_response(text)
        if result is not None:
            return result

        logger.warning("Gemini reply was not valid component JSON, recovering code from raw text")
        repaired = repair_model_response(text)
        if repaired is not None:
            return repaired

        logger.warning("Gemini reply was empty, using offline template")
        return offline_fallback(prompt, technologies)
