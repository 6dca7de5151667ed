from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.logging import setup_logging
from core.config import settings
from db.session import engine
from models.base import Base

# Import all models to register them with SQLAlchemy BEFORE create_all
from models.user_settings import UserSettings

from controllers.health import router as health_router
from controllers.invoices import router as invoices_router
from controllers.settings import router as settings_router


setup_logging()

app = FastAPI(title="Takealot Invoice Service")

# --- CORS middleware (browser front-end) ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

# --- DB tables ---
Base.metadata.create_all(bind=engine)

# --- Routers ---
app.include_router(health_router)
app.include_router(settings_router)
app.include_router(invoices_router)
