"""
Core - konfiguracja, logowanie, błędy i lokalna baza danych
"""
