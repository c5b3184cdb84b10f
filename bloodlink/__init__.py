"""
BloodLink - Donor Registry
Flask application recording donor sign-ups and showing availability
against per-blood-group targets.
"""
from flask import Flask, render_template

from .commands import seed_command
from .config import Config
from .routes import api_bp, registry_bp
from .storage import DonorRepository, JsonFileStore


def create_app(config=None, store=None):
    """Flask application factory"""
    app = Flask(__name__)
    app.config.from_object(Config)
    if isinstance(config, dict):
        app.config.from_mapping(config)
    elif config is not None:
        app.config.from_object(config)

    if store is None:
        store = JsonFileStore(app.config['DATA_DIR'])
    app.extensions['bloodlink'] = DonorRepository(store)

    app.register_blueprint(registry_bp)
    app.register_blueprint(api_bp, url_prefix='/api')
    app.cli.add_command(seed_command)

    @app.errorhandler(404)
    def not_found(e):
        return render_template('404.html'), 404

    @app.errorhandler(500)
    def server_error(e):
        return render_template('500.html'), 500

    return app
