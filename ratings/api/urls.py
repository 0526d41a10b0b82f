from django.urls import path
from .views import (
    MyRatingsListAPIView,
    RatingDetailUpdateDeleteAPIView,
    RatingListCreateAPIView,
    StoreRatingsListAPIView,
    UserStoreRatingAPIView,
)

urlpatterns = [
    path("ratings/", RatingListCreateAPIView.as_view(), name="rating-list"),
    path("ratings/my/", MyRatingsListAPIView.as_view(), name="rating-my"),
    path("ratings/store/<int:store_id>/", StoreRatingsListAPIView.as_view(), name="rating-store"),
    path("ratings/store/<int:store_id>/mine/", UserStoreRatingAPIView.as_view(), name="rating-store-mine"),
    path("ratings/<int:pk>/", RatingDetailUpdateDeleteAPIView.as_view(), name="rating-detail"),
]
