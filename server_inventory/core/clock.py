"""
Источник текущего времени для моделей.

Модели не вызывают datetime.now() напрямую, а получают Clock
при создании. В тестах подставляется FixedClock, чтобы проверять
точные значения last_modified / last_inventory.

Пример использования:
    clock = FixedClock(datetime(2025, 1, 15, 10, 30, 0))
    asset = Asset(clock=clock)
    clock.advance(seconds=60)
"""

from datetime import datetime, timedelta
from typing import Optional


class Clock:
    """Базовый интерфейс часов."""

    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock(Clock):
    """Локальное системное время (без таймзоны)."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock(Clock):
    """
    Часы с фиксированным временем.

    Attributes:
        current: Текущее значение времени
    """

    def __init__(self, current: Optional[datetime] = None):
        self.current = current or datetime(2025, 1, 1, 0, 0, 0)

    def now(self) -> datetime:
        return self.current

    def advance(self, seconds: float = 0, **kwargs: float) -> datetime:
        """Сдвигает время вперёд (kwargs передаются в timedelta)."""
        self.current = self.current + timedelta(seconds=seconds, **kwargs)
        return self.current

    def set(self, value: datetime) -> None:
        self.current = value


# Часы по умолчанию
DEFAULT_CLOCK = SystemClock()
