# mockrest/extensions.py
from flask import current_app
from flask_cors import CORS

from .storage.document_store import DocumentStore

# CORS is a real Flask extension (keeps init_app)
cors = CORS()

STORE_KEY = "document_store"


def init_store(app, store: DocumentStore | None = None) -> DocumentStore:
    """Attach a store to ``app``; a fresh one per app unless one is handed in."""
    if store is None:
        store = DocumentStore(lock_timeout=app.config.get("STORE_LOCK_TIMEOUT"))
    app.extensions[STORE_KEY] = store
    return store


def get_store() -> DocumentStore:
    return current_app.extensions[STORE_KEY]
