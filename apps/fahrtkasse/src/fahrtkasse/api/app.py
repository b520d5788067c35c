"""FastAPI app bootstrap for fahrtkasse."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fahrtkasse.api.error_handlers import register_error_handlers
from fahrtkasse.api.routes import v1_router
from fahrtkasse.db.models.payment import Payment
from fahrtkasse.db.session import get_db_session

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure FastAPI application instance."""

    app = FastAPI(
        title="Fahrtkasse API",
        summary="Shared trip payment tracking.",
        version="0.1.0",
    )

    @app.get("/health/live", include_in_schema=False)
    def health_live() -> dict[str, str]:
        return {"status": "alive"}

    @app.get("/health/ready", include_in_schema=False)
    def health_ready(
        db_session: Annotated[Session, Depends(get_db_session)],
    ) -> dict[str, str]:
        # Fails until the payment tables are migrated.
        try:
            db_session.execute(select(Payment.id).limit(1))
        except SQLAlchemyError as exc:
            logger.warning("readiness_check_failed", extra={"error": str(exc)})
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Payment storage is unavailable",
            ) from exc
        return {"status": "ready"}

    register_error_handlers(app)
    app.include_router(v1_router)
    return app


app = create_app()
