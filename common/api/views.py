from django.contrib.auth import get_user_model
from django.db.models import Count
from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.roles import ROLE_ADMIN
from profiles.api.permissions import IsAdminRole
from profiles.models import Profile
from ratings.models import Rating
from stores.models import Store

User = get_user_model()

TOP_STORES_LIMIT = 5


class DashboardStatsAPIView(APIView):
    """
    GET /api/dashboard/

    Returns platform-wide statistics for administrators:
    - total_users: number of non-admin users
    - total_stores: number of stores (active or not)
    - total_ratings: number of ratings
    - users_by_role: [{"role": ..., "count": ...}]
    - top_stores: five stores with the highest cached average rating

    Authentication: token
    Permissions: admin role
    """

    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request):
        users_by_role = list(
            Profile.objects.values("role").annotate(count=Count("id")).order_by("role")
        )
        top_stores = (
            Store.objects.order_by("-average_rating", "-total_ratings", "id")
            .values("id", "name", "average_rating", "total_ratings")[:TOP_STORES_LIMIT]
        )
        data = {
            "statistics": {
                "total_users": User.objects.exclude(profile__role=ROLE_ADMIN).exclude(is_superuser=True).count(),
                "total_stores": Store.objects.count(),
                "total_ratings": Rating.objects.count(),
                "users_by_role": users_by_role,
            },
            "top_stores": [
                {**row, "average_rating": str(row["average_rating"])} for row in top_stores
            ],
        }
        return Response(data, status=status.HTTP_200_OK)


class HealthAPIView(APIView):
    """GET /api/health/ -> public liveness payload."""

    authentication_classes = []          # No authentication required
    permission_classes = [AllowAny]      # Explicitly allow public access

    def get(self, request):
        return Response(
            {"status": "ok", "timestamp": timezone.now().isoformat()},
            status=status.HTTP_200_OK,
        )
