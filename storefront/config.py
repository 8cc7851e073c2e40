# storefront/config.py
import os

# === CONFIGURACIÓN: variables de entorno ===
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
CATALOG_API_URL = os.getenv("CATALOG_API_URL", "http://localhost:8000/graphql")
CATALOG_TIMEOUT_SECONDS = float(os.getenv("CATALOG_TIMEOUT_SECONDS", "30"))

# Expiración deslizante del carrito (10 minutos por defecto)
CART_TTL_SECONDS = int(os.getenv("CART_TTL_SECONDS", "600"))
BADGE_POLL_INTERVAL = float(os.getenv("BADGE_POLL_INTERVAL", "1.0"))

ORDER_LOG_FILE = os.getenv("ORDER_LOG_FILE", os.path.join("logs", "order_history.json"))

DEFAULT_SESSION = "anon-session"
