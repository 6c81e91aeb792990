from django.contrib import admin

from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("listing", "user", "rating", "created_at")
    list_filter = ("rating",)
    search_fields = ("listing__title", "user__email", "comment")
    readonly_fields = ("created_at",)
