"""
FastAPI Application

Main application setup and configuration.

Usage:
    DISTRIBUTOR_DISTRIBUTION_PATH=distribution.json uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import health, proofs, claims
from api.errors import APIError, api_error_handler, generic_error_handler


logging.basicConfig(
    level=getattr(logging, os.getenv("DISTRIBUTOR_LOG_LEVEL", "INFO").upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Merkle Distributor API",
        description="""
Proof lookup and claim submission for a Merkle airdrop.

## Endpoints

- **GET /root** - Committed root and EIP-712 signature domain
- **GET /proofs/{address}** - Proof record for an address
- **POST /claims** - Submit a signed claim
- **GET /claims/{address}** - Whether an address has claimed
- **GET /claims** - Claim-succeeded log
- **GET /health** - Health check
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(proofs.router)
    app.include_router(claims.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    from distributor.config.runtime import get_default_config

    service_config = get_default_config().service
    uvicorn.run(app, host=service_config.host, port=service_config.port)
