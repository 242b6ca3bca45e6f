"""JSON endpoint exposing the view helpers.

Every response is a ``{"status": "OK"|"ERROR", "data": ...}`` envelope::

    POST /AJAX/JSON?method=getCitations   {"record": {...}, "formats": ["APA"]}
    GET  /AJAX/JSON?method=getIcon&name=cart&class=big
"""
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from .citation import Citation
from .config import Config
from .dates import DateConverter
from .i18n import Translator
from .icons import Icon, MemoryCache
from .models import RecordDriver
from .utils.error_handling import ajax_error_handler

Envelope = Tuple[Dict[str, Any], int]


def _ok(data: Any) -> Envelope:
    return {"status": "OK", "data": data}, 200


def _error(message: str, status: int = 400) -> Envelope:
    return {"status": "ERROR", "data": message}, status


def create_app(icon_config: Optional[Dict[str, Any]] = None,
               date_converter: Optional[DateConverter] = None,
               translator: Optional[Translator] = None,
               rtl: Optional[bool] = None) -> Flask:
    """Build the Flask application around one set of helpers."""
    app = Flask(__name__)

    converter = date_converter or DateConverter()
    translator = translator or Translator.from_file()
    icon_helper = Icon(
        icon_config if icon_config is not None else Config.get_icon_config(),
        cache=MemoryCache(),
        rtl=Config.RTL if rtl is None else rtl,
    )

    @ajax_error_handler
    def get_citations() -> Envelope:
        body = request.get_json(silent=True)
        record = body.get("record") if isinstance(body, dict) else None
        if not isinstance(record, dict):
            return _error("Missing record")
        formats = body.get("formats")
        if formats is not None and (
            not isinstance(formats, list) or not all(isinstance(f, str) for f in formats)
        ):
            return _error("formats must be a list of strings")
        driver = RecordDriver.from_dict(record)
        # Citation holds per-record state; one per request
        citation = Citation(converter, translator)(driver)
        return _ok(citation.get_citations(formats))

    @ajax_error_handler
    def get_icon() -> Envelope:
        params = request.get_json(silent=True)
        if not isinstance(params, dict):
            params = request.values
        name = params.get("name")
        css_class = params.get("class")
        if not name:
            return _error("Missing icon name")
        if not isinstance(name, str) or not isinstance(css_class, (str, type(None))):
            return _error("Icon name and class must be strings")
        return _ok(str(icon_helper(name, css_class or None)))

    methods = {
        "getCitations": get_citations,
        "getIcon": get_icon,
    }

    @app.route("/AJAX/JSON", methods=["GET", "POST"])
    def ajax_json():
        method = request.args.get("method", "")
        handler = methods.get(method)
        if handler is None:
            app.logger.warning(f"Invalid AJAX method requested: {method}")
            payload, status = _error(f"Invalid method: {method}")
        else:
            payload, status = handler()
        return jsonify(payload), status

    # Simple health route
    @app.route("/health", methods=["GET"])
    def health():
        return "ok", 200

    return app
