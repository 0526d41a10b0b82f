from django.contrib import admin

from ratings.services.aggregation import recompute_store_rating
from .models import Store


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    """
    Store management:
    - List: ID, name, owner, aggregate rating, active flag
    - Aggregate fields are read-only; the "recompute" action rebuilds them
    - Saves write only the changed columns
    """
    list_display = (
        "id",
        "name",
        "email",
        "owner_email",
        "average_rating",
        "total_ratings",
        "is_active",
        "created_at",
    )
    list_select_related = ("owner",)
    list_filter = ("is_active", "created_at")
    search_fields = ("name", "email", "address", "owner__email")
    ordering = ("-created_at", "-id")
    readonly_fields = ("average_rating", "total_ratings", "created_at", "updated_at")
    autocomplete_fields = ("owner",)
    actions = ["recompute_ratings"]

    def owner_email(self, obj):
        return obj.owner.email if obj.owner_id else ""
    owner_email.short_description = "owner"
    owner_email.admin_order_field = "owner__email"

    def save_model(self, request, obj, form, change):
        if change:
            if form.changed_data:
                obj.save(update_fields=[*form.changed_data, "updated_at"])
            return
        super().save_model(request, obj, form, change)

    @admin.action(description="Recompute average rating and total ratings")
    def recompute_ratings(self, request, queryset):
        for store_id in queryset.values_list("id", flat=True):
            recompute_store_rating(store_id)
        self.message_user(request, f"Recomputed {queryset.count()} store(s).")
