from django.apps import AppConfig


class BookingsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.bookings"

    def ready(self) -> None:  # pragma: no cover - import side effects
        from shared.application.message_bus import message_bus

        from . import checks  # noqa: F401
        from . import handlers

        handlers.register(message_bus)
