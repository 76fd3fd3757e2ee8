import copy
import logging
import threading
import uuid
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

log = logging.getLogger(__name__)

LOCK_ERROR_MESSAGE = "Cannot obtain lock"

_MISSING = object()


class StoreError(Exception):
    """Base class for document store failures."""


class StoreUnavailableError(StoreError):
    """The store lock could not be obtained, or the store is no longer consistent."""


def random_id() -> str:
    return str(uuid.uuid4())


def add_id(document: Any, doc_id: str) -> Any:
    """Return a copy of ``document`` tagged with ``id``; non-objects pass through."""
    if isinstance(document, dict):
        tagged = dict(document)
        tagged["id"] = doc_id
        return tagged
    return document


class DocumentStore:
    """In-memory collections keyed by request path: path -> {id -> document}.

    A single lock guards the whole structure. Documents are deep-copied on the
    way in and on the way out, so nothing held by a caller aliases stored state.
    """

    def __init__(self, lock_timeout: Optional[float] = None):
        self.lock_timeout = lock_timeout
        self._data: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()
        self._broken = False

    @contextmanager
    def _locked(self, mutating: bool = False):
        timeout = -1 if self.lock_timeout is None or self.lock_timeout < 0 else self.lock_timeout
        if not self._lock.acquire(timeout=timeout):
            raise StoreUnavailableError(LOCK_ERROR_MESSAGE)
        try:
            if self._broken:
                raise StoreUnavailableError(LOCK_ERROR_MESSAGE)
            try:
                yield self._data
            except StoreError:
                raise
            except Exception:
                if mutating:
                    # a half-applied mutation may be left behind
                    self._broken = True
                    log.error("Document store marked unavailable after a failed insert")
                raise
        finally:
            self._lock.release()

    def insert(self, path: str, document: Any) -> Any:
        doc_id = random_id()
        value = add_id(copy.deepcopy(document), doc_id)
        with self._locked(mutating=True) as data:
            data.setdefault(path, {})[doc_id] = value
        return copy.deepcopy(value)

    def get_all(self, path: str) -> Dict[str, List[Any]]:
        with self._locked() as data:
            items = copy.deepcopy(list(data.get(path, {}).values()))
        return {"items": items}

    def get_by_id(self, path: str, doc_id: str, default: Any = None) -> Optional[Any]:
        with self._locked() as data:
            collection = data.get(path)
            if collection is None or doc_id not in collection:
                return default
            return copy.deepcopy(collection[doc_id])

    def get(self, path: str) -> Any:
        """Resolve ``path`` as ``<collection>/<id>`` first, else as a collection.

        ``/api/v1/persons/<id>`` returns the single document when ``<id>`` is
        stored under ``/api/v1/persons``; otherwise the whole path is listed as
        a collection (``{"items": []}`` when nothing was posted there).
        """
        *parent, tail = path.split("/")
        if parent:
            found = self.get_by_id("/".join(parent), tail, _MISSING)
            if found is not _MISSING:
                return found
        return self.get_all(path)
