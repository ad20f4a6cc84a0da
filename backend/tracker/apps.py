from django.apps import AppConfig


class TrackerConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'tracker'
    verbose_name = 'Tracker (Users • Projects • Bugs)'

    def ready(self):
        # Registers the bearer scheme with drf-spectacular.
        from tracker import schema  # noqa: F401
