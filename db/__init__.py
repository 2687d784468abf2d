"""db/ -- Process-wide persistence handle and table definitions.

Layer rule: db/ imports only stdlib + SQLAlchemy. auth/ and inventory/ build
their repositories on top of db.engine.Database; db/ never imports them.
"""
