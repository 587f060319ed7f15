from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.exceptions import AuthDenied, auth_denied_handler
from app.core.logging import setup_logging
from app.core.middleware import AdminAreaMiddleware, StructlogMiddleware
from app.modules.auth import router as auth_router

setup_logging(settings)


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
    ## Tournament Registrations API

    ### Admin authentication
    Privileged endpoints require the signed `admin_session` cookie.
    1. Log in via `POST /api/admin/login` with the admin password (form field)
    2. The response sets an HttpOnly cookie valid for a fixed lifetime
    3. `POST /api/admin/logout` clears it
    """,
    version="0.1.0",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
)

if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.add_middleware(AdminAreaMiddleware)
app.add_middleware(StructlogMiddleware)

app.add_exception_handler(AuthDenied, auth_denied_handler)

app.include_router(auth_router.router, prefix=settings.API_PREFIX, tags=["auth"])
app.include_router(auth_router.ui_router)


@app.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "ok"}
