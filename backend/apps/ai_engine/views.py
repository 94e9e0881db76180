import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from .generators import ComponentGenerator

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def generate_code(request):
    """
    Generate component code from a prompt. Model failures never surface
    here; the response is always a best-effort {name, description, code}.
    """
    prompt = request.data.get('prompt')
    technologies = request.data.get('technologies') or []

    if not isinstance(prompt, str) or not prompt.strip():
        return Response(
            {'error': 'prompt is required'},
            status=status.HTTP_400_BAD_REQUEST
        )

    if not isinstance(technologies, list) or not all(isinstance(t, str) for t in technologies):
        return Response(
            {'error': 'technologies must be a list of strings'},
            status=status.HTTP_400_BAD_REQUEST
        )

    result = ComponentGenerator().generate(prompt, technologies)
    logger.info(f"Generated {result.name} for user {request.user.pk} ({result.tier})")

    return Response(result.to_payload())
