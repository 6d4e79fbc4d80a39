import asyncio
import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP
from typing import Awaitable, Callable, Optional, Union

from pytoniq_core import Address

import config
from exceptions import InvalidArgumentError, WaitTimeoutError

logger = logging.getLogger(__name__)

TON_DECIMALS = 9

# Комиссия контракта 1% и небольшой запас на округление
BUY_COMMISSION_RATE = Decimal("0.99")
BUY_ROUNDING_EXTRA = Decimal("0.12")


def to_nano(amount: Union[str, int, float, Decimal], decimals: int = TON_DECIMALS) -> int:
    """Конвертация суммы в минимальные единицы (без float-арифметики)"""
    value = Decimal(str(amount)) * (Decimal(10) ** decimals)
    return int(value.to_integral_value(rounding=ROUND_DOWN))


def from_nano(amount: int, decimals: int = TON_DECIMALS) -> Decimal:
    """Конвертация из минимальных единиц"""
    return Decimal(amount) / (Decimal(10) ** decimals)


def calc_buy_ton_amount(desired_ton_amount: int) -> int:
    """
    Сколько нанотонов отправить, чтобы после комиссии 1% в покупку
    ушло desired_ton_amount
    """
    value = Decimal(desired_ton_amount) / BUY_COMMISSION_RATE + BUY_ROUNDING_EXTRA
    return int(value.to_integral_value(rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class WaitPolicy:
    """
    Параметры ожидания изменений в сети

    interval: пауза между проверками, секунды
    timeout: общий лимит ожидания, секунды; None - ждать без ограничения
    """
    interval: float = 5.0
    timeout: Optional[float] = 300.0

    def __post_init__(self):
        if self.interval <= 0:
            raise InvalidArgumentError(f"Wait interval must be positive, got {self.interval}")
        if self.timeout is not None and self.timeout < 0:
            raise InvalidArgumentError(f"Wait timeout must be non-negative, got {self.timeout}")

    @classmethod
    def from_config(cls) -> "WaitPolicy":
        return cls(
            interval=config.WAIT_INTERVAL,
            timeout=config.WAIT_TIMEOUT if config.WAIT_TIMEOUT > 0 else None,
        )


async def _wait_for(condition: Callable[[], Awaitable[bool]], policy: WaitPolicy, description: str):
    loop = asyncio.get_running_loop()
    deadline = None if policy.timeout is None else loop.time() + policy.timeout
    attempt = 0

    while not await condition():
        now = loop.time()
        if deadline is not None and now >= deadline:
            logger.error(f"[WAIT] Gave up waiting for {description} after {policy.timeout}s")
            raise WaitTimeoutError(description, policy.timeout)
        attempt += 1
        logger.info(f"[WAIT] Waiting for {description}... (attempt {attempt})")
        delay = policy.interval if deadline is None else min(policy.interval, deadline - now)
        await asyncio.sleep(delay)


async def wait_until_contract_is_deployed(provider, address: Address, policy: Optional[WaitPolicy] = None):
    """
    Ожидание развертывания контракта по адресу

    Raises:
        WaitTimeoutError: Контракт не появился за policy.timeout
    """
    policy = policy or WaitPolicy.from_config()

    async def deployed():
        return await provider.is_contract_deployed(address)

    await _wait_for(deployed, policy, f"contract {address.to_str()} to be deployed")


async def wait_until_wallet_seqno_changes(wallet, initial_seqno: int, policy: Optional[WaitPolicy] = None) -> int:
    """
    Ожидание смены seqno кошелька - признак того, что отправленное
    сообщение обработано

    Returns:
        int: Новый seqno
    """
    policy = policy or WaitPolicy.from_config()
    current = initial_seqno

    async def seqno_changed():
        nonlocal current
        current = await wallet.get_seqno()
        return current != initial_seqno

    await _wait_for(seqno_changed, policy, f"wallet seqno to change from {initial_seqno}")
    return current
