from enum import IntEnum

from exceptions import DecodeError


class TradeState(IntEnum):
    """Фаза жизненного цикла контракта GaspumpJetton"""
    BONDING_CURVE = 0
    DEPOSITING_TO_DEX = 1
    DEX = 2

    @classmethod
    def from_raw(cls, value, index: int = -1) -> "TradeState":
        """
        Конвертация сырого значения со стека в TradeState

        Raises:
            DecodeError: Если значение вне {0, 1, 2}
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise DecodeError("trade_state", index, "int", value)
        try:
            return cls(value)
        except ValueError:
            raise DecodeError("trade_state", index, "TradeState (0, 1 or 2)", value) from None
