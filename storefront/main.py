import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from storefront.dependencies import get_catalog_client, get_storage
from storefront.routers import cart, catalog, orders

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
log = logging.getLogger(__name__)


# --- Lifespan ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Se ejecuta al iniciar la app: resuelve Redis o memoria una sola vez
    get_storage()
    log.info("[startup] Almacenamiento del carrito inicializado.")
    yield
    # Al apagar la app
    await get_catalog_client().close()
    log.info("[shutdown] App finalizada correctamente.")


# --- Inicializacion de la app ---
app = FastAPI(
    title="Storefront API",
    version="1.0.0",
    lifespan=lifespan,
)

# --- Routers ---
app.include_router(catalog.router)
app.include_router(cart.router)
app.include_router(orders.router)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/")
async def root():
    return {"message": "Storefront API en linea"}
