"""
Исключения клиента Gaspump.

Ошибки транспорта (pytoniq) сюда не заворачиваются и пробрасываются как есть.
"""


class GaspumpError(Exception):
    """Базовая ошибка клиента."""


class InvalidArgumentError(GaspumpError, ValueError):
    """Некорректный аргумент; поднимается до любого сетевого вызова."""


class TradeStateError(GaspumpError):
    """Контракт находится не в том торговом состоянии."""

    def __init__(self, expected, actual) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Trade state is not {expected.name} (got {actual.name})")


class DecodeError(GaspumpError, ValueError):
    """Ответ get-метода не удалось разобрать."""

    def __init__(self, field: str, index: int, expected: str, value=None) -> None:
        self.field = field
        self.index = index
        self.expected = expected
        self.value = value
        super().__init__(
            f"Cannot decode field '{field}' at position {index}: "
            f"expected {expected}, got {value!r}"
        )


class WaitTimeoutError(GaspumpError, TimeoutError):
    """Ожидаемое изменение в сети не произошло за отведенное время."""

    def __init__(self, description: str, timeout: float) -> None:
        self.description = description
        self.timeout = timeout
        super().__init__(f"Timed out after {timeout}s waiting for {description}")
