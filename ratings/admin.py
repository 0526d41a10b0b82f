from django.contrib import admin

from .models import Rating
from .services.lifecycle import remove_rating


@admin.register(Rating)
class RatingAdmin(admin.ModelAdmin):
    """
    Read-only rating overview; deletions go through the lifecycle service so
    the store aggregate is recomputed.
    """
    list_display = ("id", "store", "user_email", "rating", "created_at", "updated_at")
    list_select_related = ("store", "user")
    list_filter = ("rating", "created_at")
    search_fields = ("store__name", "user__email", "comment")
    ordering = ("-created_at", "-id")
    readonly_fields = ("user", "store", "rating", "comment", "created_at", "updated_at")

    def has_add_permission(self, request):
        return False

    def user_email(self, obj):
        return obj.user.email if obj.user_id else ""
    user_email.short_description = "user"
    user_email.admin_order_field = "user__email"

    def delete_model(self, request, obj):
        remove_rating(rating_id=obj.pk, user=request.user)

    def delete_queryset(self, request, queryset):
        for rating_id in queryset.values_list("id", flat=True):
            remove_rating(rating_id=rating_id, user=request.user)
