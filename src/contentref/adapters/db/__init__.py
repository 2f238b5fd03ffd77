"""Database helpers shared by the SQLAlchemy adapters."""
