"""Bookings app package.

Reservations of coworking resources. A booking holds its resource for a
half-open window [start_time, end_time); two bookings of the same resource
whose status is not cancelled never overlap. The rules live in ``domain``
(pure Python), the use cases in ``application`` and the persistence in
``repository``; conflict checks run while the resource row is locked.
"""
