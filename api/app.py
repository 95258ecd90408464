import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .routers import charts as charts_router
from .routers import transits as transits_router
from .routers import insights as insights_router
from .routers import proxy as proxy_router
from .services import ephemeris_client, llm_client
from .middleware.logging import LoggingMiddleware


app = FastAPI(title="natal-chart-api", version="0.1.0")

# Configure CORS - localhost for development, explicit origins otherwise
app_env = os.getenv("APP_ENV")
is_dev = app_env is None or app_env.lower() in {"dev", "development"}

if is_dev:
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Length","Content-Type"],
        max_age=86400,
    )
else:
    allowed = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "").split(",") if o.strip()]
    preview = os.getenv("PREVIEW_ORIGIN")  # e.g., a Vercel preview URL
    if preview:
        allowed.append(preview)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Length","Content-Type"],
        max_age=86400,
    )

app.add_middleware(LoggingMiddleware)

app.include_router(charts_router.router)
app.include_router(transits_router.router)
app.include_router(insights_router.router)
app.include_router(proxy_router.router)


@app.get("/__health")
def health():
    return {
        "ok": True,
        "astro_configured": ephemeris_client.is_configured(),
        "ai_configured": llm_client.is_configured(),
    }


@app.get("/")
def root():
    return {"message": "natal-chart-api is running. See /__health and /docs."}
