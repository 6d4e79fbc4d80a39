"""
Обертка над контрактом GaspumpJetton (джеттон на бондинг-кривой)
Покупка, продажа, unwrap и get-методы контракта
"""
import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_FLOOR
from typing import Optional

from pytoniq_core import Address
from pytoniq_core.boc import Builder

from exceptions import InvalidArgumentError, TradeStateError
from jetton_wallet import JettonWallet
from messages import (
    SLIPPAGE_MIN_VERSION,
    FullJettonData,
    JettonBurn,
    StackReader,
    build_buy_body,
    load_tuple_full_jetton_data,
)
from ton_rpc import SendMode
from trade_state import TradeState
from utils import to_nano

logger = logging.getLogger(__name__)

MIN_BUY_TON_AMOUNT = to_nano("0.3")
# Большая часть газа на сжигание возвращается контрактом
BURN_GAS_AMOUNT = to_nano("0.3")


@dataclass(frozen=True)
class BuyOptions:
    """
    slippage: доля от 0 до 1; None - без лимита
    check_trade_state: проверять, что контракт в BONDING_CURVE
    contract_version: None - определить по get_full_jetton_data
    """
    slippage: Optional[float] = None
    check_trade_state: bool = True
    contract_version: Optional[int] = None


@dataclass(frozen=True)
class BurnOptions:
    check_trade_state: bool = True
    query_id: int = 0


def calc_slippage_limit(estimated_amount: int, slippage: float) -> int:
    """floor(estimated_amount * (1 - slippage))"""
    value = Decimal(estimated_amount) * (1 - Decimal(str(slippage)))
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


class GaspumpJetton:

    def __init__(self, address: Address, provider):
        self.address = address
        self.provider = provider

    @classmethod
    def create_from_address(cls, address: Address, provider) -> "GaspumpJetton":
        return cls(address, provider)

    # ============================================================
    #                       SEND
    # ============================================================

    async def send_buy(self, sender, ton_amount: int, options: Optional[BuyOptions] = None):
        """
        Покупка джеттонов за TON

        Снимок get_full_jetton_data запрашивается не более одного раза:
        он нужен и для проверки состояния, и для определения версии.

        Args:
            sender: Отправитель
            ton_amount: Сумма в нанотонах, не меньше 0.3 TON; газ оплачивается сверху
            options: Параметры покупки

        Raises:
            InvalidArgumentError: Сумма меньше минимума или слиппедж вне [0, 1]
            TradeStateError: Контракт не в BONDING_CURVE
        """
        options = options or BuyOptions()

        if ton_amount < MIN_BUY_TON_AMOUNT:
            raise InvalidArgumentError("Minimum amount is 0.3 TON")
        if options.slippage is not None and not 0 <= options.slippage <= 1:
            raise InvalidArgumentError(f"Slippage must be between 0 and 1, got {options.slippage}")

        full_jetton_data = None

        if options.check_trade_state:
            full_jetton_data = await self.get_full_jetton_data()
            self._require_trade_state(full_jetton_data, TradeState.BONDING_CURVE)

        version = options.contract_version
        if version is None:
            if full_jetton_data is None:
                full_jetton_data = await self.get_full_jetton_data()
            version = full_jetton_data.version

        limit = None
        if version >= SLIPPAGE_MIN_VERSION and options.slippage is not None:
            estimated = await self.get_estimate_buy_jetton_amount(ton_amount)
            limit = calc_slippage_limit(estimated, options.slippage)

        body = build_buy_body(version, do_buy=True, limit=limit)

        logger.info(f"[GASPUMP] Buy for {ton_amount} nanoTON on {self.address.to_str()} "
                    f"(version={version}, limit={limit})")
        await self.provider.internal(
            sender,
            destination=self.address,
            value=ton_amount,
            body=body,
            send_mode=SendMode.PAY_GAS_SEPARATELY,
        )

    async def send_sell(self, sender, jetton_amount: int, jetton_wallet: JettonWallet,
                        options: Optional[BurnOptions] = None):
        """Продажа джеттонов обратно в кривую (только в BONDING_CURVE)"""
        await self._send_burn_in_state(TradeState.BONDING_CURVE, sender, jetton_amount, jetton_wallet, options)

    async def send_unwrap(self, sender, jetton_amount: int, jetton_wallet: JettonWallet,
                          options: Optional[BurnOptions] = None):
        """Обмен на джеттон, торгующийся на DEX (только в DEX)"""
        await self._send_burn_in_state(TradeState.DEX, sender, jetton_amount, jetton_wallet, options)

    async def _send_burn_in_state(self, required_state: TradeState, sender, jetton_amount: int,
                                  jetton_wallet: JettonWallet, options: Optional[BurnOptions]):
        options = options or BurnOptions()

        if jetton_amount <= 0:
            raise InvalidArgumentError(f"Jetton amount must be positive, got {jetton_amount}")

        if options.check_trade_state:
            full_jetton_data = await self.get_full_jetton_data()
            self._require_trade_state(full_jetton_data, required_state)

        await jetton_wallet.send_burn(
            sender,
            BURN_GAS_AMOUNT,
            JettonBurn(
                query_id=options.query_id,
                amount=jetton_amount,
                owner=sender.address,
                response_destination=sender.address,
            ),
        )

    @staticmethod
    def _require_trade_state(full_jetton_data: FullJettonData, required_state: TradeState):
        if full_jetton_data.trade_state != required_state:
            raise TradeStateError(required_state, full_jetton_data.trade_state)

    # ============================================================
    #                       GET
    # ============================================================

    async def get_full_jetton_data(self) -> FullJettonData:
        stack = await self.provider.run_get_method(self.address, "get_full_jetton_data", [])
        return load_tuple_full_jetton_data(StackReader(stack))

    async def get_trade_state(self) -> TradeState:
        return (await self.get_full_jetton_data()).trade_state

    async def get_unwrapped_jetton_address(self) -> Address:
        stack = await self.provider.run_get_method(self.address, "anotherMinterAddress", [])
        return StackReader(stack).read_address("another_minter_address")

    async def get_jetton_wallet_address(self, owner: Address) -> Address:
        owner_builder = Builder()
        owner_builder.store_address(owner)
        owner_slice = owner_builder.end_cell().begin_parse()

        stack = await self.provider.run_get_method(self.address, "get_wallet_address", [owner_slice])
        return StackReader(stack).read_address("wallet_address")

    async def get_jetton_wallet(self, owner: Address) -> JettonWallet:
        address = await self.get_jetton_wallet_address(owner)
        return JettonWallet.create_from_address(address, self.provider)

    async def get_estimate_buy_jetton_amount(self, ton_amount: int) -> int:
        stack = await self.provider.run_get_method(self.address, "getBuyAmount", [ton_amount])
        return StackReader(stack).read_int("jetton_amount")

    async def get_estimate_sell_ton_amount(self, jetton_amount: int) -> int:
        stack = await self.provider.run_get_method(self.address, "getSellAmount", [jetton_amount])
        return StackReader(stack).read_int("ton_amount")
