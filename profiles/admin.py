from django.contrib import admin
from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """
    Account data per user: role, display name, address and whether the
    underlying login is still active.
    """
    list_display = ("user_id", "email", "name", "role", "is_active", "created_at")
    list_select_related = ("user",)
    search_fields = ("user__email", "name", "address")
    list_filter = ("role", "user__is_active")
    ordering = ("name",)
    autocomplete_fields = ("user",)
    readonly_fields = ("created_at", "updated_at")

    def email(self, obj):
        return obj.user.email
    email.admin_order_field = "user__email"

    @admin.display(boolean=True, ordering="user__is_active")
    def is_active(self, obj):
        return obj.user.is_active
