# easypay_client/main.py

from typing import Optional

from fastapi import FastAPI

from easypay_client.config import settings
from easypay_client.routers import notify


def create_app(callback_handler: Optional[notify.CallbackHandler] = None) -> FastAPI:
    """
    Build an app exposing the gateway notify endpoint.

    callback_handler receives each verified CallbackPayload; it is stored on
    this app's state, so separate apps keep separate handlers.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
    )
    notify.register_callback_handler(app, callback_handler)

    # Notify (path comes from LDC_NOTIFY_PATH)
    app.include_router(notify.router)

    return app


app = create_app()
