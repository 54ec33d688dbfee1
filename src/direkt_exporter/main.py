"""HTTP entry point: /probe, /metrics and /-/healthy."""

import argparse
import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, generate_latest

from .client import DirektClient
from .context import DEFAULT_PROBE_TIMEOUT, ProbeContext
from .errors import ValidationError
from .instrumentation import PROBES_TOTAL, setup_metrics
from .probe import gather_metrics, validate_serial
from .utils.logging import bind, setup_logging


logger = logging.getLogger(__name__)

DEFAULT_PORT = 9110


def create_app(client: Optional[DirektClient] = None) -> FastAPI:
    """Build the exporter app; ``client`` is created from the environment when omitted."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        app.state.direkt = client or DirektClient()
        app.state.probe_timeout = float(
            os.getenv("DIREKT_PROBE_TIMEOUT", str(DEFAULT_PROBE_TIMEOUT))
        )

        yield

        await app.state.direkt.close()

    app = FastAPI(title="Direkt Exporter", lifespan=lifespan)
    setup_metrics(app)

    @app.api_route("/probe", methods=["GET", "POST"])
    async def probe(request: Request, serial: Optional[str] = None):
        log = bind(logger, endpoint="probe")
        try:
            serial = validate_serial(serial)
        except ValidationError as e:
            log.error(f"Error validating request parameters: {e}")
            PROBES_TOTAL.labels(result="invalid").inc()
            return PlainTextResponse(str(e), status_code=400)

        ctx = ProbeContext.start(serial, request.app.state.probe_timeout, log)
        result = await gather_metrics(ctx, request.app.state.direkt)

        if result.offline:
            PROBES_TOTAL.labels(result="offline").inc()
        elif result.error is not None:
            PROBES_TOTAL.labels(result="error").inc()
        else:
            PROBES_TOTAL.labels(result="success").inc()

        # Partial results are still served; request_success carries the outcome
        return Response(generate_latest(result.registry), media_type=CONTENT_TYPE_LATEST)

    @app.get("/metrics")
    async def metrics():
        return Response(generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)

    @app.get("/-/healthy")
    async def healthy():
        return PlainTextResponse("Healthy")

    return app


app = create_app()


def main(argv: Optional[list] = None):
    parser = argparse.ArgumentParser(description="Prometheus exporter for Direkt units")
    parser.add_argument(
        "-d",
        "--dev",
        "--development",
        dest="dev",
        action="store_true",
        help="Whether to enable development mode",
    )
    parser.add_argument(
        "--host",
        default=os.getenv("DIREKT_EXPORTER_HOST", "0.0.0.0"),
        help="Address to listen on",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("DIREKT_EXPORTER_PORT", str(DEFAULT_PORT))),
        help="Port to listen on",
    )
    args = parser.parse_args(argv)

    setup_logging(dev=args.dev, level=os.getenv("LOG_LEVEL", "INFO"))
    logger.info("Starting exporter")

    # uvicorn drains in-flight requests on SIGINT/SIGTERM before exiting
    uvicorn.run(app, host=args.host, port=args.port, log_config=None)

    logger.info("Exiting exporter")


if __name__ == "__main__":
    main()
