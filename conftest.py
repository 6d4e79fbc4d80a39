"""Общие фикстуры и фейковый провайдер для тестов"""
from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any, Optional

import pytest
from pytoniq_core import Address, Cell
from pytoniq_core.boc import Builder

JETTON_ADDRESS = Address("0:" + "11" * 32)
OWNER_ADDRESS = Address("0:" + "22" * 32)
SENDER_ADDRESS = Address("0:" + "33" * 32)
WALLET_ADDRESS = Address("0:" + "44" * 32)
UNWRAPPED_ADDRESS = Address("0:" + "55" * 32)

BONDING_CURVE_PARAMS = [1, 10**9, 2, 3, 10**27, 8 * 10**26, 1500 * 10**9, 10 * 10**9]


def address_slice(address: Address):
    builder = Builder()
    builder.store_address(address)
    return builder.end_cell().begin_parse()


def simple_cell(tag: int) -> Cell:
    builder = Builder()
    builder.store_uint(tag, 8)
    return builder.end_cell()


def full_jetton_data_stack(trade_state: int = 0, version: int = 6) -> list:
    return [
        10**18,                        # total_supply
        -1,                            # mintable
        address_slice(OWNER_ADDRESS),  # owner
        simple_cell(1),                # content
        simple_cell(2),                # wallet_code
        trade_state,
        5 * 10**9,                     # bonding_curve_balance
        10**8,                         # commission_balance
        version,
        list(BONDING_CURVE_PARAMS),
        10,                            # commission_promille
        6 * 10**9,                     # ton_balance
        12345,                         # price_nanotons
        2 * 10**26,                    # supply_left
        10**27,                        # max_supply
    ]


@dataclass
class SentMessage:
    sender: Any
    destination: Address
    value: int
    body: Optional[Cell]
    send_mode: int


class FakeProvider:
    """
    Провайдер в памяти: отвечает на get-методы из словаря и записывает
    все вызовы и отправленные сообщения
    """

    def __init__(self, get_methods=None, deployed=None):
        self.get_methods = get_methods or {}
        self.deployed = list(deployed or [])
        self.get_calls = []
        self.sent = []
        self.deploy_checks = 0

    async def run_get_method(self, address, method, stack=None):
        self.get_calls.append((address, method, list(stack or [])))
        result = self.get_methods[method]
        if callable(result):
            result = result(stack)
        return list(result)

    async def internal(self, sender, destination, value, body=None, send_mode=0):
        self.sent.append(SentMessage(sender, destination, value, body, int(send_mode)))

    async def is_contract_deployed(self, address):
        self.deploy_checks += 1
        if self.deployed:
            return self.deployed.pop(0)
        return False

    def calls(self, method):
        return [call for call in self.get_calls if call[1] == method]


@pytest.fixture
def make_provider():
    def _make(trade_state=0, version=6, buy_amount=1000, sell_amount=500, balance=777):
        return FakeProvider({
            "get_full_jetton_data": lambda stack: full_jetton_data_stack(trade_state, version),
            "getBuyAmount": lambda stack: [buy_amount],
            "getSellAmount": lambda stack: [sell_amount],
            "get_wallet_address": lambda stack: [address_slice(WALLET_ADDRESS)],
            "anotherMinterAddress": lambda stack: [address_slice(UNWRAPPED_ADDRESS)],
            "get_wallet_data": lambda stack: [
                balance,
                address_slice(SENDER_ADDRESS),
                address_slice(JETTON_ADDRESS),
                simple_cell(3),
            ],
        })
    return _make


@pytest.fixture
def sender():
    return SimpleNamespace(address=SENDER_ADDRESS)
