"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status

from nutriscan.api.models import DetectionEventIn, ScanEventResponse, ScannerState
from nutriscan.app_logging import configure_logging
from nutriscan.containers import AppContainer
from nutriscan.domain.products import Found, NotFound
from nutriscan.services.views import build_failure, build_product_view


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Scanner ready: environment=%s cooldown_ms=%s",
            app.state.container.settings.environment,
            app.state.container.settings.scan_cooldown_ms,
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/products/{barcode}")
    async def product_details(barcode: str, request: Request) -> dict[str, object]:
        """Look a barcode up and return the scored product view."""
        state_container: AppContainer = request.app.state.container
        outcome = await state_container.product_resolver.resolve(barcode)
        if isinstance(outcome, Found):
            return build_product_view(
                outcome.record, state_container.scoring_model
            ).as_dict()
        failure = build_failure(barcode, outcome)
        status_code = (
            status.HTTP_404_NOT_FOUND
            if isinstance(outcome, NotFound)
            else status.HTTP_502_BAD_GATEWAY
        )
        raise HTTPException(status_code=status_code, detail=failure.as_dict())

    @app.get("/scanner")
    async def scanner_state(request: Request) -> ScannerState:
        """Return the scanner's gate and listening state."""
        session = request.app.state.container.scan_session
        snapshot = session.gate.snapshot()
        return ScannerState(
            status=snapshot.status.value,
            listening=session.listening,
            last_accepted_payload=snapshot.last_accepted_payload,
            current=session.current.as_dict() if session.current else None,
        )

    @app.post("/scanner/events")
    async def scanner_event(
        event: DetectionEventIn, request: Request
    ) -> ScanEventResponse:
        """Feed a raw detection into the scanner."""
        session = request.app.state.container.scan_session
        result = await session.handle_event(
            session.detection(event.symbology, event.payload)
        )
        if result is None:
            return ScanEventResponse(status="ignored")
        return ScanEventResponse(status="accepted", result=result.as_dict())

    @app.post("/scanner/release")
    async def scanner_release(request: Request) -> dict[str, str]:
        """Dismiss the current result and resume scanning."""
        request.app.state.container.scan_session.dismiss()
        return {"status": "ok"}

    return app
