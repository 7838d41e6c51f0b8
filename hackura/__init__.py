"""Hackura storefront package root.

Server-rendered Flask storefront for the Hackura ebook shop. Data lives in
the hosted Postgres database (reached through SQLAlchemy) and cover images
in the hosted object storage (reached through its REST API).
"""

__all__: list[str] = []
