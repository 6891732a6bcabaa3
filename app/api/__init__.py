"""
API module - FastAPI routers and endpoint definitions.

- routes/: route handlers (public intake, admin login, admin views)
- dependencies.py: session/repository/service injection

Usage:
    from app.api.routes import api_router
    app.include_router(api_router, prefix="/api")
"""
