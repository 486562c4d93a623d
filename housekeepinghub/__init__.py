"""
Housekeeping hub - client recurrence, housekeeper bookings and call leads.
"""

__version__ = "0.1.0"
