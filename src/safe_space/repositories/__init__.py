"""Data access helpers wrapping a SQLAlchemy session per entity."""
