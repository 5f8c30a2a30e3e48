"""
Moduły funkcjonalne aplikacji
"""
