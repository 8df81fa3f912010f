"""
Shared Kernel

Building blocks reused by every domain app: value objects, domain events,
the unit of work and the in-process message bus.
"""
