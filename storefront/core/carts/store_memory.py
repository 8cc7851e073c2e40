from typing import Dict, Optional
import logging

log = logging.getLogger(__name__)


class MemoryStorage:
    """Almacenamiento clave-valor en memoria para desarrollo o fallback cuando Redis no está disponible."""

    def __init__(self, namespace: str = "anon-session", store: Optional[Dict[str, str]] = None):
        self.namespace = namespace
        self._store = store if store is not None else {}

    def _key(self, key: str) -> str:
        return f"storefront:{self.namespace}:{key}"

    def scoped(self, namespace: str) -> "MemoryStorage":
        # Comparte el diccionario subyacente, como varias pestañas del mismo origen.
        return MemoryStorage(namespace=namespace, store=self._store)

    def get(self, key: str) -> Optional[str]:
        return self._store.get(self._key(key))

    def set_many(self, values: Dict[str, str]) -> None:
        for key, value in values.items():
            self._store[self._key(key)] = value
        log.debug(f"Claves {sorted(values)} escritas en memoria ({self.namespace}).")

    def delete(self, *keys: str) -> None:
        for key in keys:
            self._store.pop(self._key(key), None)
