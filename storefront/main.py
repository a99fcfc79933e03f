from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from storefront.api.v1.routes_catalog import router as catalog_router
from storefront.api.v1.routes_homepage import router as homepage_router
from storefront.api.v1.routes_products import router as products_router
from storefront.api.v1.routes_translations import router as translations_router
from storefront.core.config import settings
from storefront.core.errors import FetchFailure, NotFoundError
from storefront.core.logging import configure_logging

configure_logging(settings.LOG_LEVEL)

app = FastAPI(title="storefront")

app.include_router(homepage_router)
app.include_router(products_router)
app.include_router(catalog_router)
app.include_router(translations_router)


@app.exception_handler(FetchFailure)
async def fetch_failure_handler(request: Request, exc: FetchFailure):
    return JSONResponse(status_code=503, content={"detail": str(exc), "retryable": True})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.get("/health")
async def health():
    return {"status": "ok"}
