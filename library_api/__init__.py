from flask import Flask, jsonify

from library_api.config import Config
from library_api.extensions import db, migrate, jwt
from library_api.db_objects import ensure_db_objects
from library_api.errors import register_error_handlers


def create_app(config_overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # 1) Önce db init (db.engine / db.session için şart)
    db.init_app(app)
    migrate.init_app(app, db)

    # 2) Tablolar + CHECK / partial unique index
    from library_api import models  # noqa: F401  (metadata'ya kayıt)
    ensure_db_objects(app)

    # 3) JWT: cookie veya Bearer -> User
    jwt.init_app(app)
    from library_api.utils.auth import init_jwt_callbacks
    init_jwt_callbacks()

    register_error_handlers(app)

    # 4) API blueprintleri
    from library_api.controllers.auth_controller import auth_bp
    from library_api.controllers.book_controller import book_bp
    from library_api.controllers.borrowing_controller import borrowing_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(book_bp, url_prefix="/books")
    app.register_blueprint(borrowing_bp, url_prefix="/borrowings")

    from library_api.cli import init_cli
    init_cli(app)

    @app.get("/health")
    def health():
        return jsonify({"status": "success"})

    return app
