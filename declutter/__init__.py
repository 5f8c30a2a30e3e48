"""
Declutter - lokalny tracker nawyków
"""

__version__ = "0.1.0"
