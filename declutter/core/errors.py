"""
Errors - wyjątki warstwy danych Declutter
"""
from typing import Any, Optional


class DeclutterError(Exception):
    """Bazowy wyjątek aplikacji"""


class ValidationError(DeclutterError, ValueError):
    """Niepoprawna wartość wejściowa (nieznany tekst enuma, zły timestamp)"""

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value


class NotFoundError(DeclutterError, LookupError):
    """Brak wiersza o podanym identyfikatorze"""

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity} with id {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class StorageError(DeclutterError):
    """Błąd bazy danych (constraint, I/O)"""


class DecodeError(DeclutterError):
    """Uszkodzony JSON w kolumnie złożonej"""

    def __init__(self, message: str, column: Optional[str] = None, raw: Optional[str] = None):
        super().__init__(message)
        self.column = column
        self.raw = raw
