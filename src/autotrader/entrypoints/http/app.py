from fastapi import FastAPI

from autotrader.entrypoints.http.exception_handlers import register_exception_handlers
from autotrader.entrypoints.http.routes.cars import router as cars_router
from autotrader.entrypoints.http.routes.health import router as health_router


def build_app() -> FastAPI:
    app = FastAPI(
        title="Autotrader API",
        description="""
        Car listings API for searching and browsing vehicles for sale.

        ## Features
        - Search listings with free text, price range and catalog filters
        - Sort by price, year, mileage or newest first
        - Page through results (1-based pages)
        - Get listing details

        ## Authentication
        Currently no authentication required.

        ## Error Handling
        Successful responses are wrapped in a {success, message, data, timestamp}
        envelope. All errors return {detail, code, errors?} with a machine
        readable error code.
        """,
        version="0.1.0",
        docs_url="/docs",  # Swagger UI
        redoc_url="/redoc",  # ReDoc alternative
        openapi_url="/openapi.json",  # OpenAPI schema
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(cars_router, prefix="/v1")

    return app


app = build_app()
