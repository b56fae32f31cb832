from sqlalchemy import create_engine, Column, String, Text, DateTime, Integer, JSON
from sqlalchemy.orm import declarative_base, sessionmaker
from datetime import datetime
import os
import logging

# Get logger
logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DB_URL", "sqlite:///travel_search.db")
Base = declarative_base()

# Key/value settings: selected country and currency, user id, auth state
class PreferenceDB(Base):
    __tablename__ = "preferences"
    key = Column(String, primary_key=True, index=True)
    value = Column(Text, nullable=True)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

# Locations the user picked, most recent first
class RecentLocationDB(Base):
    __tablename__ = "recent_locations"
    iata_code = Column(String, primary_key=True, index=True)
    position = Column(Integer, default=0)
    airport_name = Column(String, default="")
    display_name = Column(String, default="")
    city_name = Column(String, default="")
    country_name = Column(String, default="")
    type = Column(String, default="airport")
    search_count = Column(Integer, default=1)
    last_searched = Column(DateTime, default=datetime.now)

# Completed origin/destination searches
class RecentSearchPairDB(Base):
    __tablename__ = "recent_search_pairs"
    id = Column(Integer, primary_key=True, autoincrement=True)
    position = Column(Integer, default=0)
    origin_code = Column(String, index=True)
    destination_code = Column(String, index=True)
    origin = Column(JSON)
    destination = Column(JSON)
    search_count = Column(Integer, default=1)
    search_date = Column(DateTime, default=datetime.now)


def build_engine(url=DATABASE_URL):
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


engine = build_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def create_tables(bind=None):
    try:
        Base.metadata.create_all(bind=bind or engine)
        logger.info("Database tables created (if they didn't exist previously).")
    except Exception as e:
        logger.error(f"Error creating database tables: {e}")
        raise

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
