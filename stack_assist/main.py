import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from stack_assist.config import settings
from stack_assist.core.exceptions import (
    AuthError,
    NotFoundException,
    ForbiddenException,
    ValidationException,
)
from stack_assist.routes import (
    auth_routes,
    client_routes,
    site_routes,
    hosting_routes,
    mobile_app_routes,
    developer_account_routes,
    task_routes,
    team_routes,
    notification_routes,
    dashboard_routes,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,  # Disable in production
    redoc_url="/redoc" if settings.DEBUG else None,
)

# CORS middleware
cors_origins = settings.cors_origins_list
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# Exception handlers
@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError):
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": str(exc)},
        headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(NotFoundException)
async def not_found_exception_handler(request: Request, exc: NotFoundException):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(ForbiddenException)
async def forbidden_exception_handler(request: Request, exc: ForbiddenException):
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)})


@app.exception_handler(ValidationException)
async def validation_exception_handler(request: Request, exc: ValidationException):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


# Health check endpoint
@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": settings.APP_VERSION}


# Root endpoint
@app.get("/")
async def root():
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs" if settings.DEBUG else "Documentation disabled in production",
    }


# Include routers
app.include_router(auth_routes.router, prefix="/api/auth", tags=["Auth"])
app.include_router(client_routes.onboarding_router, prefix="/api/onboard", tags=["Onboarding"])
app.include_router(client_routes.router, prefix="/api/clients", tags=["Clients"])
app.include_router(site_routes.router, prefix="/api/sites", tags=["Sites"])
app.include_router(hosting_routes.router, prefix="/api/hosting-accounts", tags=["Hosting"])
app.include_router(mobile_app_routes.router, prefix="/api/mobile-apps", tags=["Mobile Apps"])
app.include_router(
    developer_account_routes.router,
    prefix="/api/developer-accounts",
    tags=["Developer Accounts"],
)
app.include_router(task_routes.router, prefix="/api/tasks", tags=["Tasks"])
app.include_router(team_routes.router, prefix="/api/team", tags=["Team"])
app.include_router(notification_routes.router, prefix="/api/notifications", tags=["Notifications"])
app.include_router(dashboard_routes.router, prefix="/api/dashboard", tags=["Dashboard"])
