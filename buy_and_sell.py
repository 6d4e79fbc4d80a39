#!/usr/bin/env python3
"""
Пример: покупка джеттонов на 1 TON и продажа всего купленного

Использование:
    python buy_and_sell.py <jetton_address> "<24 слова мнемоники>"
"""
import argparse
import asyncio
import logging

import config
from gaspump_jetton import BurnOptions, BuyOptions, GaspumpJetton
from network_config import connect_with_retry, create_lite_client
from ton_rpc import LiteClientProvider, load_wallet_from_mnemonic, validate_address
from utils import (
    WaitPolicy,
    calc_buy_ton_amount,
    from_nano,
    to_nano,
    wait_until_contract_is_deployed,
    wait_until_wallet_seqno_changes,
)

logger = logging.getLogger("buy-and-sell")


async def buy_and_sell(jetton_address: str, mnemonic: str):
    client = create_lite_client(config.TESTNET, config.LITESERVER_INDEX)
    await connect_with_retry(client, config.CONNECT_RETRIES)

    try:
        provider = LiteClientProvider(client)
        policy = WaitPolicy.from_config()

        # кошелек
        sender = await load_wallet_from_mnemonic(client, mnemonic, config.WALLET_VERSION, config.TESTNET)

        # контракты
        gaspump_jetton = GaspumpJetton.create_from_address(validate_address(jetton_address), provider)
        jetton_wallet = await gaspump_jetton.get_jetton_wallet(sender.address)

        # покупка
        buy_ton_amount = calc_buy_ton_amount(to_nano("1.0"))
        estimated_jetton_amount = await gaspump_jetton.get_estimate_buy_jetton_amount(buy_ton_amount)

        print("Buying for 1.0 TON...")
        seqno = await sender.get_seqno()
        await gaspump_jetton.send_buy(sender, buy_ton_amount, BuyOptions(slippage=0.1))
        await wait_until_wallet_seqno_changes(sender, seqno, policy)

        # проверка баланса
        await wait_until_contract_is_deployed(provider, jetton_wallet.address, policy)

        balance = await jetton_wallet.get_balance()
        print(f"✅ Successfully bought {from_nano(balance)} jettons "
              f"(estimated: {from_nano(estimated_jetton_amount)})")

        # продажа всего купленного
        print(f"Selling all {from_nano(balance)} jettons...")
        seqno = await sender.get_seqno()
        await gaspump_jetton.send_sell(sender, balance, jetton_wallet, BurnOptions())
        await wait_until_wallet_seqno_changes(sender, seqno, policy)

        print(f"✅ Successfully sold {from_nano(balance)} jettons")
    finally:
        await client.close()


def main():
    parser = argparse.ArgumentParser(description="Buy and sell Gaspump jettons")
    parser.add_argument("jetton_address", help="GaspumpJetton contract address")
    parser.add_argument("mnemonic", help="wallet mnemonic, words separated by spaces")
    args = parser.parse_args()

    logging.basicConfig(format='%(asctime)s - %(name)s - %(levelname)s - %(message)s', level=config.LOG_LEVEL)

    try:
        asyncio.run(buy_and_sell(args.jetton_address, args.mnemonic))
    except Exception as e:
        logger.exception("Buy and sell failed: %s", e)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
