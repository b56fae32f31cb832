"""
Database Module

SQLAlchemy tables and helpers for locally persisted settings and recent searches.
"""
