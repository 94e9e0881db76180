from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .serializers import UserSummarySerializer


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def current_user(request):
    """
    Return the signed-in user (the dashboard uses its id as the userId filter)
    """
    return Response({'user': UserSummarySerializer(request.user).data})
