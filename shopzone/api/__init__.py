# shopzone/api/__init__.py
from fastapi import FastAPI

from shopzone.api.routers import addresses, auth, cart, health, orders, products, users


def include_routers(app: FastAPI) -> None:
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(cart.router)
    app.include_router(orders.router)
    app.include_router(addresses.router)
