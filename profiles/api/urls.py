from django.urls import path
from .views import UserDetailUpdateDeleteAPIView, UserListCreateAPIView

urlpatterns = [
    path("users/", UserListCreateAPIView.as_view(), name="user-list"),
    path("users/<int:pk>/", UserDetailUpdateDeleteAPIView.as_view(), name="user-detail"),
]
