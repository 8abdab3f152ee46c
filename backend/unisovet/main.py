import logging
import os

from dotenv import load_dotenv
from flask import Flask

# Load environment variables conditionally
# Only load from .env when DATABASE_URL is not already defined by the environment
if not os.getenv("DATABASE_URL"):
    load_dotenv()

from unisovet.controllers.record_helpers import SHELL_EXTENSION  # noqa: E402
from unisovet.core.api_utils import api_response  # noqa: E402
from unisovet.domain.interfaces import (  # noqa: E402
    IKeyValueStore,
    ITextCompletionService,
)
from unisovet.services.shell import PAGE_TITLES, ClinicShell, Page  # noqa: E402

logger = logging.getLogger(__name__)


def _build_completion_service() -> ITextCompletionService:
    from unisovet.core.config import (
        get_gemini_api_key,
        get_gemini_base_url,
        get_gemini_model,
        get_gemini_timeout,
    )
    from unisovet.services.gemini_service import GeminiService

    return GeminiService(
        api_key=get_gemini_api_key(),
        model=get_gemini_model(),
        base_url=get_gemini_base_url(),
        timeout=get_gemini_timeout(),
    )


def _init_sentry(env: str) -> None:
    sentry_dsn = os.getenv("SENTRY_DSN")
    if not sentry_dsn:
        logger.info(
            "Sentry not initialized (SENTRY_DSN not set)",
            extra={"context": {"environment": env}},
        )
        return

    import sentry_sdk
    from sentry_sdk.integrations.flask import FlaskIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=sentry_dsn,
        environment=env,
        release=os.getenv("GIT_SHA", "unknown"),
        integrations=[
            FlaskIntegration(),
            SqlalchemyIntegration(),
        ],
        traces_sample_rate=0.1,
        send_default_pii=False,
    )
    logger.info(
        "Sentry initialized",
        extra={
            "context": {
                "environment": env,
                "release": os.getenv("GIT_SHA", "unknown"),
            }
        },
    )


def create_app(
    shell: ClinicShell = None,
    persistent_store: IKeyValueStore = None,
    completion_service: ITextCompletionService = None,
):
    """
    Build the Flask application around a single clinic shell.

    Args:
        shell: Ready-made shell (tests); built from the other arguments when None
        persistent_store: Key/value adapter; defaults to the SQL-backed store
        completion_service: Assistant backend; defaults to the Gemini REST client
    """
    # Determine environment
    env = os.getenv("FLASK_ENV", "development")
    is_production = env == "production"

    app = Flask(__name__)

    from unisovet.core.config import is_test_mode

    if is_test_mode():
        app.config["TESTING"] = True

    # Configure structured logging (after app creation so we can register hooks)
    from unisovet.core.config import is_log_to_file_enabled
    from unisovet.core.logging_config import setup_logging

    setup_logging(
        app=app,
        log_level=logging.INFO if is_production else logging.DEBUG,
        log_to_file=is_log_to_file_enabled(),
        use_json_format=is_production,  # JSON logs in production, colored in dev
    )
    logger.info(
        "Logging configured",
        extra={"context": {"environment": env, "json_format": is_production}},
    )

    from unisovet.core.config import log_assistant_config, log_timezone_config

    log_timezone_config()
    log_assistant_config()

    _init_sentry(env)

    # Replies and records keep their accented text
    app.json.ensure_ascii = False

    from unisovet.core.config import is_rate_limit_enabled
    from unisovet.core.limiter_config import limiter

    app.config["RATELIMIT_STORAGE_URI"] = os.getenv("LIMITER_STORAGE_URI", "memory://")
    app.config["RATELIMIT_ENABLED"] = is_rate_limit_enabled()
    limiter.init_app(app)

    if not is_rate_limit_enabled():
        limiter.enabled = False
        logger.info(
            "Rate limiting disabled",
            extra={"context": {"test_mode": bool(app.config.get("TESTING"))}},
        )

    if shell is None:
        if persistent_store is None:
            # The storage table must exist before the first slot is read.
            try:
                from unisovet.db.session import create_tables, get_engine

                create_tables()
                eng = get_engine()
                logger.info(
                    "Database ready",
                    extra={
                        "context": {
                            "url": eng.url.render_as_string(hide_password=True),
                            "driver": eng.dialect.name,
                        }
                    },
                )
            except Exception as e:
                logger.warning(
                    "Failed to auto-create tables",
                    extra={"context": {"error": str(e)}},
                    exc_info=True,
                )

            from unisovet.repositories.persistent_store import PersistentStore

            persistent_store = PersistentStore()

        if completion_service is None:
            completion_service = _build_completion_service()

        from unisovet.core.config import get_clinic_phone

        shell = ClinicShell(
            persistent_store, completion_service, clinic_phone=get_clinic_phone()
        )

    app.extensions[SHELL_EXTENSION] = shell

    # Register blueprints
    from unisovet.controllers.appointment_controller import appointment_bp
    from unisovet.controllers.assistant_controller import assistant_bp
    from unisovet.controllers.client_controller import client_bp
    from unisovet.controllers.dashboard_controller import dashboard_bp
    from unisovet.controllers.inventory_controller import inventory_bp
    from unisovet.controllers.pet_controller import pet_bp
    from unisovet.controllers.supplier_controller import supplier_bp

    app.register_blueprint(dashboard_bp)
    app.register_blueprint(client_bp)
    app.register_blueprint(pet_bp)
    app.register_blueprint(appointment_bp)
    app.register_blueprint(inventory_bp)
    app.register_blueprint(supplier_bp)
    app.register_blueprint(assistant_bp)

    def _navigation():
        return {
            "currentPage": shell.current_page.value,
            "title": PAGE_TITLES[shell.current_page],
            "pages": [{"id": p.value, "title": PAGE_TITLES[p]} for p in Page],
            "assistantOpen": shell.assistant.is_open,
        }

    @app.route("/")
    def index():
        return api_response(True, "UnisoVet", _navigation())

    @app.route("/navigate/<page>", methods=["POST"])
    def navigate(page):
        shell.navigate(page)
        return api_response(True, PAGE_TITLES[shell.current_page], _navigation())

    @app.errorhandler(404)
    def not_found(e):
        return api_response(False, "Recurso não encontrado", None, 404)

    @app.errorhandler(429)
    def rate_limited(e):
        return api_response(False, "Muitas requisições, tente novamente", None, 429)

    @app.errorhandler(500)
    def internal_error(e):
        logger.error(
            "Unhandled server error",
            extra={"context": {"error": str(e)}},
            exc_info=True,
        )
        return api_response(False, "Erro interno do servidor", None, 500)

    return app
