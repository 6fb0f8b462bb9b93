"""
Department Records & Analytics
Main Flask application entry point
"""

import logging

from flask import Flask
from config import Config
from database import db, init_db
from services.record_store import RecordStore


def create_app(config_class=Config):
    """Application factory pattern"""
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Logging
    logging.basicConfig(format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    log_level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    app.logger.setLevel(log_level)
    logging.getLogger('services').setLevel(log_level)

    # Initialize extensions with app
    db.init_app(app)

    # One records store per application
    app.extensions['record_store'] = RecordStore(db)

    # Register blueprints
    from routes.management import management_bp
    from routes.faculty import faculty_bp
    from routes.student import student_bp

    app.register_blueprint(management_bp, url_prefix='/management')
    app.register_blueprint(faculty_bp, url_prefix='/faculty')
    app.register_blueprint(student_bp, url_prefix='/student')

    # Initialize database
    init_db(app)

    if app.config.get('SEED_ON_STARTUP'):
        seed_store(app)

    return app


def seed_store(app):
    """Load the bootstrap roster, from SEED_DATA_PATH when configured"""
    from sample_data import load_seed_data, load_seed_file

    store = RecordStore.from_app(app)
    with app.app_context():
        seed_path = app.config.get('SEED_DATA_PATH')
        if seed_path:
            app.logger.info("Loading seed data from %s", seed_path)
            return load_seed_file(store, seed_path)
        return load_seed_data(store)


if __name__ == '__main__':
    from config import DevelopmentConfig

    app = create_app(DevelopmentConfig)
    app.run(host='0.0.0.0', port=8000, debug=True, use_reloader=False)
