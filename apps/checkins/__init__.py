"""Check-ins app package.

Front desk presence tracking: who is in the space right now. A user has at
most one active check-in at a time.
"""
