from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reporting.core.config import settings
from reporting.routers import checks, invoices

OPENAPI_TAGS = [
    {"name": "Invoices", "description": "Generate monthly invoices from usage facts."},
    {"name": "Checks", "description": "Verify dimension data is complete before invoicing."},
]

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.version,
    description="Read-only API turning metered usage facts into monthly invoices.",
    openapi_tags=OPENAPI_TAGS,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()
    ],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(invoices.router, prefix="/v1/invoices", tags=["Invoices"])
app.include_router(checks.router, prefix="/v1/checks", tags=["Checks"])


@app.get("/health", include_in_schema=False)
async def health() -> dict[str, str]:
    return {"status": "ok"}
