"""Resources app package.

Bookable units of the space: desks, meeting rooms, private offices and
phone booths, each with a capacity and an hourly rate.
"""
