"""
agendacore - access control and weekly availability for the scheduling platform.
"""

__version__ = "0.1.0"
