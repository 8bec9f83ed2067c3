from sqlalchemy import event
from sqlalchemy.engine import Engine

from library_api.extensions import db


@event.listens_for(Engine, "connect")
def _sqlite_pragmas(dbapi_conn, _record):
    # SQLite FK'leri (ve ON DELETE CASCADE) varsayılan olarak kapalı
    if type(dbapi_conn).__module__.startswith("sqlite3"):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def ensure_db_objects(app):
    """
    Tabloları, CHECK (quantity >= 0) kısıtını ve açık ödünç için
    partial unique index'i oluşturur. Migration kullanılıyorsa
    AUTO_CREATE_TABLES=0 ile kapatılabilir.
    """
    if not app.config.get("AUTO_CREATE_TABLES", True):
        return

    with app.app_context():
        try:
            db.create_all()
            app.logger.info(f"[db_objects] Schema ready on {db.engine.url.render_as_string(hide_password=True)}")
        except Exception as e:
            app.logger.error(f"[db_objects] HATA: {e}")
            raise
