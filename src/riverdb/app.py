import decimal
import logging
from datetime import date, datetime

from flask import Flask, jsonify
from flask.json.provider import DefaultJSONProvider
from werkzeug.exceptions import HTTPException

from riverdb.catalog import SAMPLE_ITEMS, CatalogStore
from riverdb.config import config

logger = logging.getLogger(__name__)


class JSONProvider(DefaultJSONProvider):
    """Render datetimes as ISO-8601 and Decimals as floats."""

    @staticmethod
    def default(o):
        if isinstance(o, (datetime, date)):
            return o.isoformat()
        if isinstance(o, decimal.Decimal):
            return float(o)
        return DefaultJSONProvider.default(o)


def create_app() -> Flask:
    """Application factory."""
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.json = JSONProvider(app)

    app.catalog = CatalogStore(SAMPLE_ITEMS)

    # Register blueprints
    from riverdb.api.catalog import bp as catalog_bp
    from riverdb.api.projects import bp as projects_bp
    from riverdb.api.statistics import bp as statistics_bp

    app.register_blueprint(projects_bp, url_prefix="/api/projects")
    app.register_blueprint(statistics_bp, url_prefix="/api")
    app.register_blueprint(catalog_bp, url_prefix="/api/catalog")

    @app.route("/api/health")
    def health():
        return {"status": "ok"}

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        logger.exception("Unhandled error")
        return jsonify({"error": "Internal server error", "details": str(e)}), 500

    return app


# For flask run command
app = create_app()
