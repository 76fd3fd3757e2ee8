from flask import Flask
from .config import Config
from .extensions import cors, init_store
from .storage.document_store import DocumentStore


def create_app(config_class: type[Config] = Config, store: DocumentStore | None = None):
    # no static route: every path belongs to the mock collections
    app = Flask(__name__, static_folder=None)
    app.config.from_object(config_class)
    # echo documents back with the client's key order
    app.json.sort_keys = False
    # "//x" is its own collection, not a redirect to "/x"
    app.url_map.merge_slashes = False

    # Extensions
    cors.init_app(app)
    init_store(app, store)

    # Blueprints
    from .routes.mock_api import AnyPathConverter, bp as mock_api

    app.url_map.converters["anypath"] = AnyPathConverter
    app.register_blueprint(mock_api)

    return app
