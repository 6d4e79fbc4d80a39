import asyncio
import logging
from typing import Optional

from pytoniq import LiteClient

logger = logging.getLogger(__name__)


async def connect_with_retry(client: LiteClient, max_retries: int = 5) -> LiteClient:
    """
    Подключение к lite-серверу с повторами (экспоненциальная задержка)

    Повторяется только установка соединения; последняя ошибка пробрасывается.
    """
    if max_retries < 1:
        raise ValueError("max_retries must be positive")
    for attempt in range(max_retries):
        try:
            await client.connect()
            logger.info(f"[NETWORK] Successfully connected to network (attempt {attempt + 1})")
            return client
        except Exception as e:
            logger.warning(f"[NETWORK] Connection attempt {attempt + 1}/{max_retries} failed: {e}")
            if attempt == max_retries - 1:
                logger.error("[NETWORK] All connection attempts failed")
                raise
            await asyncio.sleep(2 ** attempt)


def create_lite_client(testnet: bool = False, ls_index: Optional[int] = None) -> LiteClient:
    """
    Создание LiteClient из глобального конфига сети

    Args:
        testnet: Использовать конфиг testnet
        ls_index: Индекс lite-сервера; если не задан, перебираются 0 и 1
    """
    factory = LiteClient.from_testnet_config if testnet else LiteClient.from_mainnet_config
    indexes = [ls_index] if ls_index is not None else [0, 1]

    last_error = None
    for i in indexes:
        try:
            return factory(ls_i=i)
        except Exception as e:
            logger.warning(f"[NETWORK] Config with ls_i={i} failed: {e}")
            last_error = e
    raise last_error
