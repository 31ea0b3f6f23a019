"""
Minimal FastAPI backend for the storefront data layer: customers, catalog and reviews.
A thin caller of storefront.services; every request runs in one DB transaction.
Deployment-ready: CORS, configurable host/port via env.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.core.config import get_settings
from storefront.core.errors import (
    ConstraintViolation,
    NotFoundError,
    ReferentialError,
    StorefrontError,
    ValidationError,
)
from storefront.core.logging import configure_logging
from storefront.routers import categories, customers, products, reviews

settings = get_settings()
configure_logging(settings.log_level)

ERROR_STATUS = {
    ValidationError: 422,
    ReferentialError: 422,
    NotFoundError: 404,
    ConstraintViolation: 409,
}

app = FastAPI(
    title="Storefront API",
    description="Customers, products with categories, and one-per-customer product reviews.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StorefrontError)
async def storefront_error_handler(request: Request, exc: StorefrontError):
    status = ERROR_STATUS.get(type(exc), 400)
    return JSONResponse(status_code=status, content={"detail": exc.to_dict()})


app.include_router(customers.router)
app.include_router(categories.router)
app.include_router(products.router)
app.include_router(reviews.router)


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
