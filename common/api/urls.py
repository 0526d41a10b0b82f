from django.urls import path
from .views import DashboardStatsAPIView, HealthAPIView

urlpatterns = [
    path("dashboard/", DashboardStatsAPIView.as_view(), name="dashboard"),
    path("health/", HealthAPIView.as_view(), name="health"),
]
