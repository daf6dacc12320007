"""
SinceOnEarth API entry point.

create_app() prepares the database (tables plus airline rows), makes sure
the airport directory is available and mounts the auth, flights, stats,
reference and admin blueprints.

    python -m sinceonearth.app
    gunicorn 'sinceonearth.app:create_app()'
"""

import logging
import os
from pathlib import Path

import requests
from flask import Flask
from flask_cors import CORS

from sinceonearth.config import config
from sinceonearth.models import init_db
from sinceonearth.api import admin_bp, auth_bp, flights_bp, reference_bp, stats_bp
from sinceonearth.reference.airports import fetch_openflights, get_airport_directory
from sinceonearth.storage import storage

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger(__name__)


def _ensure_airport_data() -> None:
    """Download the OpenFlights file when a path is configured but missing."""
    path = config.reference.airports_path
    if not path or Path(path).exists():
        return
    try:
        fetch_openflights(Path(path))
    except requests.RequestException as e:
        logger.warning(f'Airport data download failed, using bundled table only: {e}')


def _register_error_handlers(app: Flask) -> None:
    """Every error leaves the API as a JSON body, never Flask's HTML page."""

    @app.errorhandler(404)
    def not_found(e):
        return {'error': 'Not found'}, 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return {'error': 'Method not allowed'}, 405

    @app.errorhandler(500)
    def server_error(e):
        logger.error(f'Unhandled error while serving request: {e}')
        return {'error': 'Internal server error'}, 500


def create_app(load_reference_data: bool = True) -> Flask:
    """
    Build the SinceOnEarth API.

    Args:
        load_reference_data: Download (if configured) and load the airport
                             directory up front. Tests pass False and rely
                             on the bundled table being loaded lazily.
    """
    app = Flask(__name__)
    app.config['SECRET_KEY'] = config.secret_key
    app.json.sort_keys = False

    CORS(app, resources={r'/api/*': {'origins': list(config.cors_origins)}})

    logger.info(f'Preparing database at {config.database.url}')
    init_db()
    storage.seed_airlines()

    if load_reference_data:
        _ensure_airport_data()
        directory = get_airport_directory()
        logger.info(f'Airport directory ready with {len(directory)} airports')

    for blueprint in (auth_bp, flights_bp, stats_bp, reference_bp, admin_bp):
        app.register_blueprint(blueprint)

    @app.route('/health')
    def health():
        return {'status': 'ok'}

    _register_error_handlers(app)
    return app


def run_development_server():
    """Serve the API with Flask's built-in server on $PORT (default 5000)."""
    app = create_app()
    port = int(os.environ.get('PORT', 5000))

    logger.info(f'Starting SinceOnEarth API on http://localhost:{port}')
    app.run(host='0.0.0.0', port=port, debug=config.debug)


if __name__ == '__main__':
    run_development_server()
