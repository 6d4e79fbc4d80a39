import logging

from pytoniq_core import Address

from messages import JettonBurn, JettonWalletData, StackReader, load_tuple_jetton_wallet_data, store_jetton_burn
from ton_rpc import SendMode

logger = logging.getLogger(__name__)


class JettonWallet:
    """Обертка над кошельком джеттона конкретного владельца"""

    def __init__(self, address: Address, provider):
        self.address = address
        self.provider = provider

    @classmethod
    def create_from_address(cls, address: Address, provider) -> "JettonWallet":
        return cls(address, provider)

    async def send_burn(self, sender, gas_amount: int, burn: JettonBurn):
        """
        Отправка запроса на сжигание джеттонов

        Результат сжигания не проверяется - это задача вызывающего кода.

        Args:
            sender: Отправитель (владелец кошелька)
            gas_amount: TON на газ в нанотонах, большая часть возвращается
            burn: Параметры сжигания
        """
        logger.info(f"[JETTON WALLET] Burn {burn.amount} from {self.address.to_str()}, gas={gas_amount}")
        await self.provider.internal(
            sender,
            destination=self.address,
            value=gas_amount,
            body=store_jetton_burn(burn),
            send_mode=SendMode.PAY_GAS_SEPARATELY,
        )

    async def get_wallet_data(self) -> JettonWalletData:
        stack = await self.provider.run_get_method(self.address, "get_wallet_data", [])
        return load_tuple_jetton_wallet_data(StackReader(stack))

    async def get_balance(self) -> int:
        return (await self.get_wallet_data()).balance
