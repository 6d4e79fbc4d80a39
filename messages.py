"""
Кодек сообщений контрактов GaspumpJetton и JettonWallet
Сериализует тела сообщений в ячейки и разбирает ответы get-методов
"""
from dataclasses import dataclass
from typing import List, Optional

from pytoniq_core import Address, Cell
from pytoniq_core.boc import Builder, Slice

from exceptions import DecodeError
from trade_state import TradeState

# op-коды из ABI контрактов
OP_BONDING_CURVE_BUY = 0x6CD3E4B0  # 1825825968
OP_JETTON_BURN = 0x595F07BC

# Слиппедж поддерживается контрактом начиная с версии 5
SLIPPAGE_MIN_VERSION = 5
LIMIT_BITS = 257


# ============================================================
#                       MESSAGES
# ============================================================

@dataclass(frozen=True)
class BondingCurveBuy:
    do_buy: bool = True
    limit: Optional[int] = None


@dataclass(frozen=True)
class JettonBurn:
    query_id: int
    amount: int
    owner: Address
    response_destination: Optional[Address]


def store_bonding_curve_buy(src: BondingCurveBuy) -> Cell:
    """Тело покупки для контрактов версии < 5: op + do_buy"""
    builder = Builder()
    builder.store_uint(OP_BONDING_CURVE_BUY, 32)
    builder.store_bit(int(src.do_buy))
    return builder.end_cell()


def store_bonding_curve_buy_with_slippage(src: BondingCurveBuy) -> Cell:
    """Тело покупки для контрактов версии >= 5: op + do_buy + Maybe int257 limit"""
    builder = Builder()
    builder.store_uint(OP_BONDING_CURVE_BUY, 32)
    builder.store_bit(int(src.do_buy))
    if src.limit is not None:
        builder.store_bit(1)
        builder.store_int(src.limit, LIMIT_BITS)
    else:
        builder.store_bit(0)
    return builder.end_cell()


def build_buy_body(version: int, do_buy: bool = True, limit: Optional[int] = None) -> Cell:
    """
    Выбор формата тела покупки по версии контракта

    Старые контракты не умеют разбирать поле limit, поэтому для версий
    ниже SLIPPAGE_MIN_VERSION лимит отбрасывается.
    """
    if version < SLIPPAGE_MIN_VERSION:
        return store_bonding_curve_buy(BondingCurveBuy(do_buy=do_buy))
    return store_bonding_curve_buy_with_slippage(BondingCurveBuy(do_buy=do_buy, limit=limit))


def load_bonding_curve_buy(cell: Cell) -> BondingCurveBuy:
    """Разбор тела покупки (обоих форматов)"""
    source = cell.begin_parse()
    op = source.load_uint(32)
    if op != OP_BONDING_CURVE_BUY:
        raise DecodeError("op", 0, hex(OP_BONDING_CURVE_BUY), hex(op))
    do_buy = bool(source.load_bit())
    limit = None
    if source.remaining_bits > 0 and source.load_bit():
        limit = source.load_int(LIMIT_BITS)
    return BondingCurveBuy(do_buy=do_buy, limit=limit)


def store_jetton_burn(src: JettonBurn) -> Cell:
    builder = Builder()
    builder.store_uint(OP_JETTON_BURN, 32)
    builder.store_uint(src.query_id, 64)
    builder.store_coins(src.amount)
    builder.store_address(src.owner)
    builder.store_address(src.response_destination)
    return builder.end_cell()


def load_jetton_burn(cell: Cell) -> JettonBurn:
    source = cell.begin_parse()
    op = source.load_uint(32)
    if op != OP_JETTON_BURN:
        raise DecodeError("op", 0, hex(OP_JETTON_BURN), hex(op))
    return JettonBurn(
        query_id=source.load_uint(64),
        amount=source.load_coins(),
        owner=source.load_address(),
        response_destination=source.load_address(),
    )


# ============================================================
#                    GET-METHOD RESULTS
# ============================================================

@dataclass(frozen=True)
class BondingCurveParams:
    math_scale: int
    coin_scale: int
    alpha: int
    beta: int
    max_supply: int
    bonding_curve_max_supply: int
    max_ton_amount: int
    dex_fee_amount: int


@dataclass(frozen=True)
class FullJettonData:
    total_supply: int
    mintable: bool
    owner: Address
    content: Cell
    wallet_code: Cell
    trade_state: TradeState
    bonding_curve_balance: int
    commission_balance: int
    version: int
    bonding_curve_params: BondingCurveParams
    commission_promille: int
    ton_balance: int
    price_nanotons: int
    supply_left: int
    max_supply: int


@dataclass(frozen=True)
class JettonWalletData:
    balance: int
    owner: Address
    jetton_master: Address
    wallet_code: Cell


class StackReader:
    """
    Последовательное чтение стека, который вернул get-метод

    Каждое поле проверяется сразу при чтении; первая же ошибка
    поднимается как DecodeError с именем поля и позицией.
    """

    def __init__(self, stack: List, prefix: str = ""):
        self._stack = list(stack)
        self._prefix = prefix
        self.position = 0

    def __len__(self):
        return len(self._stack) - self.position

    def _next(self, field: str, expected: str):
        name = self._prefix + field
        if self.position >= len(self._stack):
            raise DecodeError(name, self.position, expected, "<end of stack>")
        value = self._stack[self.position]
        self.position += 1
        return name, value

    def read_int(self, field: str) -> int:
        name, value = self._next(field, "int")
        if isinstance(value, bool) or not isinstance(value, int):
            raise DecodeError(name, self.position - 1, "int", value)
        return value

    def read_bool(self, field: str) -> bool:
        # В TVM true = -1, false = 0
        return self.read_int(field) != 0

    def read_address(self, field: str) -> Optional[Address]:
        name, value = self._next(field, "address")
        if isinstance(value, Address):
            return value
        if isinstance(value, Cell) and not isinstance(value, Slice):
            value = value.begin_parse()
        if isinstance(value, Slice):
            try:
                return value.load_address()
            except Exception as e:
                raise DecodeError(name, self.position - 1, "address", value) from e
        raise DecodeError(name, self.position - 1, "address", value)

    def read_cell(self, field: str) -> Cell:
        name, value = self._next(field, "cell")
        if isinstance(value, Slice):
            return value.to_cell()
        if isinstance(value, Cell):
            return value
        raise DecodeError(name, self.position - 1, "cell", value)

    def read_tuple(self, field: str) -> "StackReader":
        name, value = self._next(field, "tuple")
        if not isinstance(value, (list, tuple)):
            raise DecodeError(name, self.position - 1, "tuple", value)
        return StackReader(value, prefix=f"{name}.")


def load_tuple_bonding_curve_params(source: StackReader) -> BondingCurveParams:
    return BondingCurveParams(
        math_scale=source.read_int("math_scale"),
        coin_scale=source.read_int("coin_scale"),
        alpha=source.read_int("alpha"),
        beta=source.read_int("beta"),
        max_supply=source.read_int("max_supply"),
        bonding_curve_max_supply=source.read_int("bonding_curve_max_supply"),
        max_ton_amount=source.read_int("max_ton_amount"),
        dex_fee_amount=source.read_int("dex_fee_amount"),
    )


def load_tuple_full_jetton_data(source: StackReader) -> FullJettonData:
    """
    Разбор результата get_full_jetton_data

    Args:
        source: Стек ответа в исходном порядке полей

    Returns:
        FullJettonData: Снимок состояния контракта

    Raises:
        DecodeError: Поле отсутствует, имеет неверный тип или trade_state вне {0, 1, 2}
    """
    total_supply = source.read_int("total_supply")
    mintable = source.read_bool("mintable")
    owner = source.read_address("owner")
    content = source.read_cell("content")
    wallet_code = source.read_cell("wallet_code")
    trade_state = TradeState.from_raw(source.read_int("trade_state"), source.position - 1)
    bonding_curve_balance = source.read_int("bonding_curve_balance")
    commission_balance = source.read_int("commission_balance")
    version = source.read_int("version")
    bonding_curve_params = load_tuple_bonding_curve_params(source.read_tuple("bonding_curve_params"))
    commission_promille = source.read_int("commission_promille")
    ton_balance = source.read_int("ton_balance")
    price_nanotons = source.read_int("price_nanotons")
    supply_left = source.read_int("supply_left")
    max_supply = source.read_int("max_supply")

    return FullJettonData(
        total_supply=total_supply,
        mintable=mintable,
        owner=owner,
        content=content,
        wallet_code=wallet_code,
        trade_state=trade_state,
        bonding_curve_balance=bonding_curve_balance,
        commission_balance=commission_balance,
        version=version,
        bonding_curve_params=bonding_curve_params,
        commission_promille=commission_promille,
        ton_balance=ton_balance,
        price_nanotons=price_nanotons,
        supply_left=supply_left,
        max_supply=max_supply,
    )


def load_tuple_jetton_wallet_data(source: StackReader) -> JettonWalletData:
    return JettonWalletData(
        balance=source.read_int("balance"),
        owner=source.read_address("owner"),
        jetton_master=source.read_address("jetton_master"),
        wallet_code=source.read_cell("wallet_code"),
    )
