import os
from dotenv import load_dotenv

load_dotenv()

CALLBACK_SERVICE_HOST = os.getenv("CALLBACK_SERVICE_HOST", "0.0.0.0")
CALLBACK_SERVICE_PORT = int(os.getenv("CALLBACK_SERVICE_PORT", "8083"))

ORDER_BACKEND_URL = os.getenv("ORDER_BACKEND_URL", "http://localhost:8080")
ORDER_BACKEND_TIMEOUT = float(os.getenv("ORDER_BACKEND_TIMEOUT", "10"))

SUCCESS_REDIRECT_DELAY_SECONDS = float(os.getenv("SUCCESS_REDIRECT_DELAY_SECONDS", "3"))
ORDER_HISTORY_PATH = os.getenv("ORDER_HISTORY_PATH", "/orders/history")
CART_PATH = os.getenv("CART_PATH", "/cart")
HOME_PATH = os.getenv("HOME_PATH", "/")

# Signature checks are skipped while a secret is empty
MOMO_ACCESS_KEY = os.getenv("MOMO_ACCESS_KEY", "")
MOMO_SECRET_KEY = os.getenv("MOMO_SECRET_KEY", "")
VNPAY_HASH_SECRET = os.getenv("VNPAY_HASH_SECRET", "")

REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_PASSWORD = os.getenv("REDIS_PASSWORD", None)
REDIS_DB = int(os.getenv("REDIS_DB", "0"))
REDIS_GUARD_ENABLED = os.getenv("REDIS_GUARD_ENABLED", "true").lower() == "true"

PROCESSED_CALLBACK_TTL = int(os.getenv("PROCESSED_CALLBACK_TTL", "86400"))  # 24 hours
