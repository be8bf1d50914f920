from django.apps import AppConfig


class PerformanceAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'performance_app'

    def ready(self):
        import performance_app.signals  # noqa: F401
