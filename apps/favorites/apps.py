from django.apps import AppConfig  # type: ignore


class FavoritesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.favorites"
    label = "favorites"
    verbose_name = "Favorites"
