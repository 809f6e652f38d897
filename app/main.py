from datetime import datetime, timezone
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings, configure_logging
from app.core.exceptions import install_exception_handlers
from app.api.router import api_router

configure_logging()

app = FastAPI(
    title="Commerce Back-Office API",
    description="Merchants, catalog, orders and sales reports",
    version="1.0.0"
)

# 1. CORS for the dashboard client (bearer token in the Authorization header)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 2. Translate core failures into JSON errors
install_exception_handlers(app)

# 3. API routes
app.include_router(api_router, prefix="/api")

# 4. Health checks
@app.get("/")
def root():
    return {
        "status": "online",
        "message": "Commerce Back-Office API",
        "version": "1.0.0"
    }

@app.get("/api/health")
def health():
    return {
        "ok": True,
        "service": "commerce-backoffice",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
