"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.utils import timezone  # type: ignore

from .application.command_handlers import CompleteBookingCommand, CompleteBookingHandler
from .domain.exceptions import BookingStateError
from .models import Booking
from .repository import DjangoBookingRepository

logger = logging.getLogger(__name__)


# ============================================================================
# PERIODIC TASKS (scheduled through Celery Beat)
# ============================================================================

@shared_task(name="bookings.complete_finished_bookings")
def complete_finished_bookings() -> dict[str, int]:
    """
    Complete confirmed bookings whose window has ended.

    Runs every 15 minutes.

    Returns:
        dict: {"completed": number of bookings completed}
    """
    now = timezone.now()
    completed_count = 0
    handler = CompleteBookingHandler(DjangoBookingRepository())

    finished_ids = list(
        Booking.objects.filter(
            status=Booking.Status.CONFIRMED,
            end_time__lte=now,
        ).values_list("pk", flat=True)
    )

    for booking_id in finished_ids:
        try:
            handler.handle(CompleteBookingCommand(booking_id=booking_id))
        except BookingStateError:
            # Cancelled or completed since the query ran
            logger.info(f"Booking {booking_id} skipped, status changed concurrently")
            continue
        except Exception as e:
            logger.error(f"Error completing booking {booking_id}: {e}", exc_info=True)
            continue
        completed_count += 1

    if completed_count > 0:
        logger.info(f"Completed {completed_count} bookings")

    return {"completed": completed_count}
