from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

import ton_rpc
from conftest import JETTON_ADDRESS, SENDER_ADDRESS, simple_cell
from exceptions import InvalidArgumentError
from ton_rpc import LiteClientProvider, SendMode, WalletSender, load_wallet_from_mnemonic, parse_mnemonic, validate_address

MNEMONIC = " ".join(["word"] * 24)


def make_wallet():
    wallet = MagicMock()
    wallet.address = SENDER_ADDRESS
    wallet.create_wallet_internal_message.return_value = "message"
    wallet.raw_transfer = AsyncMock()
    wallet.get_seqno = AsyncMock(return_value=3)
    return wallet


async def test_wallet_sender_sends_one_internal_message():
    wallet = make_wallet()
    body = simple_cell(1)

    await WalletSender(wallet).send(JETTON_ADDRESS, 10**9, body, SendMode.PAY_GAS_SEPARATELY)

    wallet.create_wallet_internal_message.assert_called_once_with(
        destination=JETTON_ADDRESS, send_mode=1, value=10**9, body=body)
    wallet.raw_transfer.assert_awaited_once_with(["message"])


async def test_wallet_sender_exposes_address_and_seqno():
    sender = WalletSender(make_wallet())
    assert sender.address is SENDER_ADDRESS
    assert await sender.get_seqno() == 3


async def test_provider_internal_delegates_to_sender():
    sender = AsyncMock()
    provider = LiteClientProvider(MagicMock())

    await provider.internal(sender, destination=JETTON_ADDRESS, value=5, body=None, send_mode=SendMode.PAY_GAS_SEPARATELY)

    sender.send.assert_awaited_once_with(JETTON_ADDRESS, 5, None, SendMode.PAY_GAS_SEPARATELY)


async def test_provider_run_get_method():
    client = MagicMock()
    client.run_get_method = AsyncMock(return_value=[1, 2])

    result = await LiteClientProvider(client).run_get_method(JETTON_ADDRESS, "getBuyAmount", [10])

    assert result == [1, 2]
    client.run_get_method.assert_awaited_once_with(address=JETTON_ADDRESS, method="getBuyAmount", stack=[10])


@pytest.mark.parametrize("state, expected", [("active", True), ("uninit", False), ("frozen", False)])
async def test_provider_is_contract_deployed(state, expected):
    client = MagicMock()
    client.get_account_state = AsyncMock(return_value=SimpleNamespace(state=SimpleNamespace(type_=state)))

    assert await LiteClientProvider(client).is_contract_deployed(JETTON_ADDRESS) is expected


async def test_transport_errors_propagate():
    client = MagicMock()
    client.run_get_method = AsyncMock(side_effect=ConnectionError("timeout"))

    with pytest.raises(ConnectionError):
        await LiteClientProvider(client).run_get_method(JETTON_ADDRESS, "get_full_jetton_data")


def test_validate_address():
    raw_address = "0:" + "11" * 32
    assert validate_address(raw_address).to_str(is_user_friendly=False) == raw_address
    assert validate_address(JETTON_ADDRESS) is JETTON_ADDRESS

    with pytest.raises(InvalidArgumentError):
        validate_address("not an address")


def test_parse_mnemonic_requires_24_words():
    assert len(parse_mnemonic(MNEMONIC)) == 24
    with pytest.raises(InvalidArgumentError):
        parse_mnemonic("one two three")


async def test_load_wallet_v4r2(monkeypatch):
    wallet_cls = MagicMock()
    wallet_cls.from_mnemonic = AsyncMock(return_value=make_wallet())
    monkeypatch.setattr(ton_rpc, "WalletV4R2", wallet_cls)
    client = MagicMock()

    sender = await load_wallet_from_mnemonic(client, MNEMONIC)

    assert sender.address is SENDER_ADDRESS
    wallet_cls.from_mnemonic.assert_awaited_once_with(provider=client, mnemonics=["word"] * 24)


async def test_load_wallet_v5r1_uses_network_id(monkeypatch):
    wallet_cls = MagicMock()
    wallet_cls.from_mnemonic = AsyncMock(return_value=make_wallet())
    monkeypatch.setattr(ton_rpc, "WalletV5R1", wallet_cls)

    await load_wallet_from_mnemonic(MagicMock(), MNEMONIC, version="v5r1", testnet=True)

    assert wallet_cls.from_mnemonic.await_args.kwargs["network_global_id"] == -3


async def test_load_wallet_unknown_version():
    with pytest.raises(InvalidArgumentError):
        await load_wallet_from_mnemonic(MagicMock(), MNEMONIC, version="v3r2")
