import json
import logging

from src.db.database import PreferenceDB, SessionLocal

# Get logger
logger = logging.getLogger(__name__)

# Preference keys
SELECTED_COUNTRY_KEY = "selected_country"
SELECTED_CURRENCY_KEY = "selected_currency"
SELECTED_LANGUAGE_KEY = "selected_language"
USER_ID_KEY = "user_id"
AUTH_USER_KEY = "auth_user"
ACCESS_TOKEN_KEY = "access_token"
USER_CREATED_KEY = "user_created"
INSTALL_DATE_KEY = "install_date"
DEVICE_ID_KEY = "device_id"
VENDOR_ID_KEY = "vendor_id"
PSEUDO_ID_KEY = "pseudo_id"


class PreferenceStore:
    """Small persistent key/value store backed by the ``preferences`` table."""

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def get(self, key, default=None):
        db = self.session_factory()
        try:
            row = db.query(PreferenceDB).filter(PreferenceDB.key == key).first()
            if row is None or row.value is None:
                return default
            return row.value
        finally:
            db.close()

    def set(self, key, value):
        db = self.session_factory()
        try:
            row = db.query(PreferenceDB).filter(PreferenceDB.key == key).first()
            if row is None:
                db.add(PreferenceDB(key=key, value=value))
            else:
                row.value = value
            db.commit()
        except Exception as e:
            logger.error(f"Error saving preference {key}: {e}")
            db.rollback()
            raise
        finally:
            db.close()

    def delete(self, key):
        db = self.session_factory()
        try:
            db.query(PreferenceDB).filter(PreferenceDB.key == key).delete()
            db.commit()
        except Exception as e:
            logger.error(f"Error deleting preference {key}: {e}")
            db.rollback()
            raise
        finally:
            db.close()

    def get_json(self, key, default=None):
        raw = self.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning(f"Stored preference {key} is not valid JSON, ignoring it")
            return default

    def set_json(self, key, value):
        self.set(key, json.dumps(value))
