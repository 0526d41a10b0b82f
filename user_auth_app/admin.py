from django.contrib import admin
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

User = get_user_model()

# Replace the stock registration (idempotent).
try:
    admin.site.unregister(User)
except admin.sites.NotRegistered:
    pass


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    """
    User list with ID, account role (Profile.role) and admin flags.
    """
    list_display = (
        "id",
        "email",
        "profile_name_display",
        "profile_role_display",
        "is_staff",
        "is_active",
        "date_joined",
        "last_login",
    )
    list_select_related = ("profile",)
    ordering = ("-date_joined", "-id")
    search_fields = ("email", "username", "profile__name", "profile__role")
    list_filter = ("is_staff", "is_active", "profile__role")

    def profile_name_display(self, obj):
        prof = getattr(obj, "profile", None)
        return getattr(prof, "name", "") or ""
    profile_name_display.short_description = "name"
    profile_name_display.admin_order_field = "profile__name"

    def profile_role_display(self, obj):
        prof = getattr(obj, "profile", None)
        return getattr(prof, "role", "") or ""
    profile_role_display.short_description = "role"
    profile_role_display.admin_order_field = "profile__role"
