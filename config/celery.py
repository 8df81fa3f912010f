import os

from celery import Celery
from celery.schedules import crontab  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("coworking_platform")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


# ============================================================================
# CELERY BEAT SCHEDULE (Periodic Tasks)
# ============================================================================

app.conf.beat_schedule = {
    # Close out bookings whose end time has passed, every 15 minutes
    "complete-finished-bookings": {
        "task": "bookings.complete_finished_bookings",
        "schedule": crontab(minute="*/15"),
    },
}
