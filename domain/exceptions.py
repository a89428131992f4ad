class AppError(Exception):
    """Базовая ошибка предметной области."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(AppError):
    """Запрошенная сущность не существует."""


class ValidationError(AppError):
    """Данные нарушают инварианты (пустое/длинное имя, дубликат среди соседей, неверный режим)."""


class CycleError(AppError):
    """Перемещение нарушает древовидность структуры."""


class StoreError(AppError):
    """Непредвиденная ошибка хранилища."""
