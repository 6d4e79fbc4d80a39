# config.py
import os
from dotenv import load_dotenv

# Загружаем переменные из .env
load_dotenv()

# Сеть
TESTNET = os.environ.get("TESTNET", "False") == "True"
LITESERVER_INDEX = os.environ.get("LITESERVER_INDEX")
LITESERVER_INDEX = int(LITESERVER_INDEX) if LITESERVER_INDEX else None
CONNECT_RETRIES = int(os.environ.get("CONNECT_RETRIES", "5"))

# Кошелек для примера (v4r2 или v5r1)
WALLET_VERSION = os.environ.get("WALLET_VERSION", "v4r2").lower()

# Ожидание изменений в сети (секунды, 0 = без ограничения)
WAIT_INTERVAL = float(os.environ.get("WAIT_INTERVAL", "5"))
WAIT_TIMEOUT = float(os.environ.get("WAIT_TIMEOUT", "300"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
