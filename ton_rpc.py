"""
Модуль для базовых RPC операций с TON блокчейном
Граница между контрактными обертками и pytoniq: get-методы, отправка
внутренних сообщений, проверка развертывания и кошелек-отправитель
"""
import logging
from enum import IntFlag
from typing import List, Optional, Union

from pytoniq import LiteClient, WalletV4R2, WalletV5R1
from pytoniq_core import Address, Cell

from exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

MNEMONIC_WORDS = 24

# Стандартные wallet_id для V5R1 (mainnet / testnet)
V5R1_WALLET_ID = 2147483409
MAINNET_GLOBAL_ID = -239
TESTNET_GLOBAL_ID = -3


class SendMode(IntFlag):
    NONE = 0
    PAY_GAS_SEPARATELY = 1
    IGNORE_ERRORS = 2
    DESTROY_ACCOUNT_IF_ZERO = 32
    CARRY_ALL_REMAINING_INCOMING_VALUE = 64
    CARRY_ALL_REMAINING_BALANCE = 128


def validate_address(addr: Union[str, Address]) -> Address:
    """
    Валидация TON адреса

    Args:
        addr: Адрес в любом формате (raw, user-friendly) или Address

    Returns:
        Address: Разобранный адрес

    Raises:
        InvalidArgumentError: Если адрес невалидный
    """
    if isinstance(addr, Address):
        return addr
    try:
        return Address(addr)
    except Exception as e:
        raise InvalidArgumentError(f"Invalid address: {addr}") from e


class WalletSender:
    """Отправитель сообщений от имени кошелька pytoniq (V4R2 или V5R1)"""

    def __init__(self, wallet):
        self.wallet = wallet

    @property
    def address(self) -> Address:
        return self.wallet.address

    async def send(self, destination: Address, value: int, body: Optional[Cell] = None,
                   send_mode: int = SendMode.PAY_GAS_SEPARATELY):
        message = self.wallet.create_wallet_internal_message(
            destination=destination,
            send_mode=int(send_mode),
            value=value,
            body=body if body is not None else Cell.empty(),
        )
        logger.info("[TX] %s -> %s value=%d mode=%d",
                    self.address.to_str(), destination.to_str(), value, int(send_mode))
        return await self.wallet.raw_transfer([message])

    async def get_seqno(self) -> int:
        return await self.wallet.get_seqno()


class LiteClientProvider:
    """
    Провайдер вызовов контрактов поверх pytoniq.LiteClient

    Любой объект с теми же корутинами (internal, run_get_method,
    is_contract_deployed) может использоваться вместо него.
    """

    def __init__(self, client: LiteClient):
        self.client = client

    async def run_get_method(self, address: Address, method: str, stack: Optional[List] = None) -> List:
        logger.debug("[TON RPC] runGetMethod %s on %s, stack=%s", method, address.to_str(), stack)
        result = await self.client.run_get_method(address=address, method=method, stack=stack or [])
        logger.debug("[TON RPC] %s result: %s", method, result)
        return result

    async def is_contract_deployed(self, address: Address) -> bool:
        account = await self.client.get_account_state(address)
        return account.state.type_ == "active"

    async def internal(self, sender: WalletSender, destination: Address, value: int,
                       body: Optional[Cell] = None, send_mode: int = SendMode.PAY_GAS_SEPARATELY):
        return await sender.send(destination, value, body, send_mode)


def parse_mnemonic(mnemonic: str) -> List[str]:
    words = mnemonic.split()
    if len(words) != MNEMONIC_WORDS:
        raise InvalidArgumentError(
            f"Invalid mnemonic length: {len(words)} words, expected {MNEMONIC_WORDS}")
    return words


async def load_wallet_from_mnemonic(client: LiteClient, mnemonic: str, version: str = "v4r2",
                                    testnet: bool = False) -> WalletSender:
    """
    Создание кошелька-отправителя из мнемоники

    Args:
        client: Подключенный LiteClient
        mnemonic: 24 слова через пробел
        version: "v4r2" или "v5r1"
        testnet: Влияет на network_global_id для V5R1

    Returns:
        WalletSender: Отправитель, привязанный к кошельку
    """
    words = parse_mnemonic(mnemonic)

    if version == "v4r2":
        wallet = await WalletV4R2.from_mnemonic(provider=client, mnemonics=words)
    elif version == "v5r1":
        wallet = await WalletV5R1.from_mnemonic(
            provider=client,
            mnemonics=words,
            wallet_id=V5R1_WALLET_ID,
            network_global_id=TESTNET_GLOBAL_ID if testnet else MAINNET_GLOBAL_ID,
        )
    else:
        raise InvalidArgumentError(f"Unsupported wallet version: {version}")

    logger.info("[WALLETS] Loaded %s wallet: %s", version, wallet.address.to_str(is_bounceable=False))
    return WalletSender(wallet)
