from django.urls import path
from .views import ChangePasswordView, LoginView, ProfileView, SignupView

urlpatterns = [
    path("auth/signup/", SignupView.as_view(), name="signup"),
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/change-password/", ChangePasswordView.as_view(), name="change-password"),
    path("auth/profile/", ProfileView.as_view(), name="auth-profile"),
]
