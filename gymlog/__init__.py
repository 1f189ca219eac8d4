import os
import sqlite3

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine

db = SQLAlchemy()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY clauses unless asked per connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_app(test_config=None) -> Flask:
    app = Flask(__name__)
    app.config["SECRET_KEY"] = os.getenv("SECRET_KEY", "dev")
    # SQLite file in the working directory by default
    app.config["SQLALCHEMY_DATABASE_URI"] = os.getenv("DATABASE_URL", "sqlite:///gymlog.db")
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    app.config["LOG_FILE"] = os.getenv("LOG_FILE", "logs.txt")
    app.json.sort_keys = False

    if test_config:
        app.config.update(test_config)

    db.init_app(app)

    from .routes import bp, register_error_handlers
    app.register_blueprint(bp)
    register_error_handlers(app)

    with app.app_context():
        from .models import Exercise, Workout, WorkoutSet  # noqa: F401
        db.create_all()

    return app
