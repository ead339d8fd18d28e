"""
Hired Equipment Tracking System (HETS) rotation service.
"""

__version__ = "1.0.0"
