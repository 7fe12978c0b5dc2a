"""FastAPI application factory for the ShopForm service."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from protean.domain import Domain

from shopform.api.errors import register_exception_handlers
from shopform.api.routes import userdata_router
from shopform.media import get_image_store
from shopform.media.store import URL_PREFIX
from shopform.utils.logging import add_context, clear_context


def create_app(domain: Domain) -> FastAPI:
    """Build the HTTP app around an initialized domain.

    Every request runs inside the domain's context, so route handlers can
    use ``current_domain``.
    """
    app = FastAPI(
        title="ShopForm API",
        description="Storefront registrations and product reviews",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the Protean domain context and bind request log context."""
        add_context(path=request.url.path, shop=request.query_params.get("shop"))
        try:
            with domain.domain_context():
                return await call_next(request)
        finally:
            clear_context()

    register_exception_handlers(app)
    app.include_router(userdata_router)

    # Uploaded review images
    uploads_dir = get_image_store().ensure_directory()
    app.mount(URL_PREFIX, StaticFiles(directory=uploads_dir), name="uploads")

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": domain.name})

    return app
