"""
Parking slot allocator: vehicles request a slot of their size from a fixed
pool and receive a priced ticket.
"""

__version__ = "0.1.0"
