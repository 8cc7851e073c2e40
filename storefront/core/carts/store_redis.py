from typing import Dict, Optional
import redis
import logging

log = logging.getLogger(__name__)


class RedisStorage:
    """Almacenamiento clave-valor en Redis, con espacio de nombres por visitante."""

    def __init__(self, url="redis://localhost:6379/0", namespace: str = "anon-session", client=None):
        self.client = client or redis.Redis.from_url(url, decode_responses=True)
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"storefront:{self.namespace}:{key}"

    def scoped(self, namespace: str) -> "RedisStorage":
        return RedisStorage(namespace=namespace, client=self.client)

    def get(self, key: str) -> Optional[str]:
        return self.client.get(self._key(key))

    def set_many(self, values: Dict[str, str]) -> None:
        # Ambas claves del sobre se escriben juntas.
        with self.client.pipeline() as pipe:
            for key, value in values.items():
                pipe.set(self._key(key), value)
            pipe.execute()
        log.debug(f"Claves {sorted(values)} escritas en Redis ({self.namespace}).")

    def delete(self, *keys: str) -> None:
        if keys:
            self.client.delete(*(self._key(k) for k in keys))
