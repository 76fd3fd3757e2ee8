import json

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import HTTPException
from werkzeug.routing import PathConverter

from ..extensions import get_store
from ..storage.document_store import StoreError

bp = Blueprint("mock_api", __name__)


class AnyPathConverter(PathConverter):
    """Like ``path`` but also matches a leading slash, so ``//x`` routes here."""

    regex = ".+?"
    part_isolating = False


def collection_path() -> str:
    """The request path exactly as the client sent it, minus the query string.

    ``request.path`` is percent-decoded, which would fold ``/a%2Fb`` into ``/a/b``.
    """
    raw = request.environ.get("RAW_URI") or request.environ.get("REQUEST_URI")
    if not raw:
        return request.path
    # WSGI carries the raw bytes as latin-1
    raw = raw.encode("latin-1").decode("utf-8", "replace")
    if not raw.startswith("/"):
        # absolute-form request target
        return request.path
    return raw.partition("?")[0].partition("#")[0]


@bp.get("/", defaults={"subpath": ""})
@bp.get("/<anypath:subpath>")
def get_documents(subpath):
    # subpath only makes the route match; the key is the raw path
    result = get_store().get(collection_path())
    return jsonify(result), 200


@bp.post("/", defaults={"subpath": ""})
@bp.post("/<anypath:subpath>")
def insert_document(subpath):
    body = request.get_json(force=True)
    path = collection_path()
    stored = get_store().insert(path, body)
    current_app.logger.info("Stored document under %s", path)
    return jsonify(stored), 201


@bp.errorhandler(StoreError)
def store_error(e):
    current_app.logger.exception("Document store failure on %s %s", request.method, request.path)
    return jsonify({"error": str(e)}), 500


@bp.app_errorhandler(HTTPException)
def http_error(e):
    """Render werkzeug errors (bad JSON, wrong method) in the same envelope."""
    response = e.get_response()
    response.data = json.dumps({"error": e.description})
    response.content_type = "application/json"
    return response
