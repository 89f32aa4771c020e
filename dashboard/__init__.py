import os
import secrets

from dotenv import load_dotenv
from flask import Flask, Response, g, render_template, request
from flask_caching import Cache
from flask_sqlalchemy import SQLAlchemy
from flask_wtf import CSRFProtect
from flask_wtf.csrf import CSRFError

load_dotenv()
db = SQLAlchemy()
cache = Cache()
csrf = CSRFProtect()

DEFAULT_CSP_TEMPLATE = (
    "default-src 'self'; "
    "img-src 'self' data:; "
    "style-src 'self' 'unsafe-inline'; "
    "script-src 'self' 'nonce-{nonce}'; "
    "frame-ancestors 'self'; "
    "form-action 'self'; "
    "object-src 'none'; "
    "base-uri 'self'"
)
DEFAULT_CACHE_TIMEOUT = 300


def _get_bool_env(var_name: str, default: bool = False) -> bool:
    """Return a boolean environment variable value."""

    value = os.getenv(var_name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(var_name: str, default: int) -> int:
    """Return an integer environment variable, ignoring unparseable values."""

    value = os.getenv(var_name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


def normalise_database_url(url: str) -> str:
    """Route plain PostgreSQL URLs through the psycopg driver."""

    for scheme in ("postgres://", "postgresql://"):
        if url.startswith(scheme):
            return "postgresql+psycopg://" + url[len(scheme) :]
    return url


def engine_options(url: str) -> dict:
    """Return SQLAlchemy engine options for ``url``.

    PostgreSQL connections require TLS; the mode can be relaxed through
    ``DATABASE_SSLMODE`` for local development only.
    """

    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    if url.startswith("postgresql"):
        sslmode = os.getenv("DATABASE_SSLMODE", "require")
        return {"pool_pre_ping": True, "connect_args": {"sslmode": sslmode}}
    return {"pool_pre_ping": True}


def create_app(args: list):
    """Application factory used by Flask."""
    app = Flask(__name__)
    app.config["SECRET_KEY"] = os.getenv("SECRET_KEY")
    default_secure_cookies = "--demo" not in args
    session_cookie_secure = _get_bool_env(
        "SESSION_COOKIE_SECURE", default=default_secure_cookies
    )
    app.config["ENFORCE_HTTPS"] = _get_bool_env("ENFORCE_HTTPS", default=False)
    app.config.update(
        SESSION_COOKIE_SECURE=session_cookie_secure,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE="Lax",
    )

    raw_url = os.getenv("DATABASE_URL")
    if not raw_url:
        raise RuntimeError("DATABASE_URL environment variable not set")
    database_url = normalise_database_url(raw_url.strip())
    app.config["SQLALCHEMY_DATABASE_URI"] = database_url
    app.config["SQLALCHEMY_ENGINE_OPTIONS"] = engine_options(database_url)
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False

    app.config["CACHE_TYPE"] = os.getenv("CACHE_TYPE", "SimpleCache")
    app.config["CACHE_DEFAULT_TIMEOUT"] = _get_int_env(
        "CACHE_DEFAULT_TIMEOUT", DEFAULT_CACHE_TIMEOUT
    )

    db.init_app(app)
    cache.init_app(app)
    csrf.init_app(app)

    from dashboard.utils.numeric import format_cents

    app.jinja_env.filters["format_cents"] = format_cents

    @app.before_request
    def set_csp_nonce():
        """Generate a nonce for inline scripts allowed by the CSP."""

        g.csp_nonce = secrets.token_urlsafe(16)

    @app.after_request
    def apply_security_headers(response):
        """Attach standard security headers to every response."""
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        if request.is_secure or app.config.get("ENFORCE_HTTPS", False):
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        nonce = getattr(g, "csp_nonce", "") or secrets.token_urlsafe(16)
        csp_template = app.config.get(
            "CONTENT_SECURITY_POLICY", DEFAULT_CSP_TEMPLATE
        )
        response.headers.setdefault(
            "Content-Security-Policy", csp_template.format(nonce=nonce)
        )
        return response

    @app.before_request
    def block_http_options():
        """Return a 405 for HTTP OPTIONS requests to reduce information leakage."""
        if request.method == "OPTIONS":
            return Response(status=405)

    @app.errorhandler(CSRFError)
    def handle_csrf_error(error):
        """Render a helpful page when CSRF validation fails."""
        return (
            render_template("errors/csrf_error.html", reason=error.description),
            400,
        )

    with app.app_context():
        # Make sure the invoices table exists so a fresh database can serve
        # the dashboard without a separate setup step.
        from . import models  # noqa: F401

        db.create_all()

        from dashboard.services.invoice_gateway import InvoiceGateway

        app.extensions["invoice_gateway"] = InvoiceGateway(db)

        from dashboard.routes.invoice_routes import invoice

        app.register_blueprint(invoice)

    return app
