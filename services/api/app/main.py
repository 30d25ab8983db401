"""Pizzeria checkout API service entrypoint."""

from fastapi import FastAPI

from services.api.app.db.init_db import init_db
from services.api.app.routers.checkout import router as checkout_router

app = FastAPI(title="Pizzeria Checkout API")

app.include_router(checkout_router)


@app.on_event("startup")
def _startup() -> None:
    init_db()


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
