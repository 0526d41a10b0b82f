from django.urls import path
from .views import MyStoreAPIView, StoreDetailUpdateDeleteAPIView, StoreListCreateAPIView

urlpatterns = [
    path("stores/", StoreListCreateAPIView.as_view(), name="store-list"),
    path("stores/my/", MyStoreAPIView.as_view(), name="store-my"),
    path("stores/<int:pk>/", StoreDetailUpdateDeleteAPIView.as_view(), name="store-detail"),
]
