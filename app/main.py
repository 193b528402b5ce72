from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import get_settings
from app.core.errors import register_exception_handlers
from app.core.logger import setup_logging
from app.routes.health import router as health_router
from app.routes.auth import router as auth_router
from app.routes.orgs import router as orgs_router
from app.routes.org_applications import router as org_applications_router
from app.routes.admin import router as admin_router
from app.routes.audit import router as audit_router

setup_logging()

app = FastAPI(title="ERNAM Partner Admissions")

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_origin_regex=r"^http://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health_router)
app.include_router(auth_router)
app.include_router(orgs_router)
app.include_router(org_applications_router)
app.include_router(admin_router)
app.include_router(audit_router)
