"""
Order / inventory core: stock reservations, order building and order state transitions
"""

__version__ = "1.0.0"
