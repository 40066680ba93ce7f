"""Reviews & Moderation FastAPI application.

Web server that processes review and feedback commands synchronously via HTTP.
Every request is wrapped in the reviews domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from [tool.protean] in pyproject.toml.
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from reviews.api import install
from reviews.api.schemas import StatusResponse
from reviews.domain import logger, reviews

reviews.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Reviews API",
    description="Product reviews, helpfulness feedback and moderation",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install(app)

logger.info("reviews_api_ready", domain=reviews.name)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health", response_model=StatusResponse)
async def health() -> StatusResponse:
    return StatusResponse()
