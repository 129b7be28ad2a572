from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from campus_books.entrypoints.http.exception_handlers import register_exception_handlers
from campus_books.entrypoints.http.routes.auth import router as auth_router
from campus_books.entrypoints.http.routes.health import router as health_router
from campus_books.entrypoints.http.routes.listings import router as listings_router
from campus_books.infra.config import (
    UPLOADS_URL_PREFIX,
    cors_origins,
    session_https_only,
    session_secret,
    upload_dir,
)
from campus_books.infra.logging_setup import configure_logging

SESSION_COOKIE = "campus_books_session"


def build_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Campus Books API",
        description="""
        Campus textbook-resale marketplace API.

        ## Features
        - Browse, search and filter active listings (paginated)
        - Listing detail with seller contact
        - Create listings with up to 3 images

        ## Authentication
        Cookie session: `POST /api/login`, then send the session cookie.
        Creating listings requires a session.

        ## Error Handling
        All errors return structured JSON responses with error codes.
        Validation errors list every failed field.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    register_exception_handlers(app)

    app.add_middleware(
        SessionMiddleware,
        secret_key=session_secret(),
        session_cookie=SESSION_COOKIE,
        same_site="lax",
        https_only=session_https_only(),
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(auth_router, prefix="/api")
    app.include_router(listings_router, prefix="/api")

    # Uploaded images, referenced from listings as "uploads/<name>"
    app.mount(
        f"/{UPLOADS_URL_PREFIX}",
        StaticFiles(directory=upload_dir(), check_dir=False),
        name=UPLOADS_URL_PREFIX,
    )

    return app


app = build_app()
