"""Flask API for urlsentry.

Run: python -m urlsentry.api
"""

import os
import logging
from typing import Optional

from flask import Blueprint, Flask, current_app, jsonify, request

from urlsentry.app.errors import InvalidURLError
from urlsentry.app.normalizer import is_valid
from urlsentry.app.scanner import analyze
from urlsentry.app.threat_intel import LocalBlacklist, RemoteBlacklist, fetch_remote

# Logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("api")

VERSION = "1.0"
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", 3000))

bp = Blueprint("urlsentry", __name__)


def _envelope(url, status: str, data=None, error: Optional[str] = None):
    return jsonify({"url": url, "status": status, "data": data, "error": error})


@bp.route("/health", methods=["GET"])
def health():
    remote = current_app.config["REMOTE_BLACKLIST"]
    return jsonify({
        "status": "ok",
        "version": VERSION,
        "remote_blacklist": {
            "available": remote.available,
            "entries": len(remote.entries),
        },
    })


@bp.route("/analyze", methods=["GET"])
def analyze_route():
    url = request.args.get("url", "")
    if not is_valid(url):
        return _envelope(url, "error", error="Invalid URL"), 400

    try:
        result = analyze(
            url,
            current_app.config["REMOTE_BLACKLIST"],
            current_app.config["LOCAL_BLACKLIST"],
        )
    except InvalidURLError:
        return _envelope(url, "error", error="Invalid URL"), 400
    except Exception as e:
        logger.exception("Analysis failed for %s: %s", url, e)
        return _envelope(url, "error", error=f"Analysis failed: {e}"), 500

    return _envelope(url, "success", data=result.to_dict()), 200


@bp.route("/checking", methods=["GET"])
def checking():
    """Plain-text lookup of the raw url against the local list only."""
    url = request.args.get("url")
    if url is None:
        return "Missing 'url' query parameter", 400
    if current_app.config["LOCAL_BLACKLIST"].contains(url):
        return f"Warning: {url} is a known phishing site"
    return f"URL {url} is not in our phishing database"


def create_app(remote: Optional[RemoteBlacklist] = None,
               local: Optional[LocalBlacklist] = None) -> Flask:
    """
    Build the Flask app. The remote list is fetched here, once, unless a
    snapshot is passed in; its outcome holds for the life of the app.
    """
    app = Flask(__name__)
    app.config["REMOTE_BLACKLIST"] = remote if remote is not None else fetch_remote()
    app.config["LOCAL_BLACKLIST"] = local if local is not None else LocalBlacklist()
    app.register_blueprint(bp)
    return app


if __name__ == "__main__":
    create_app().run(host=HOST, port=PORT, debug=False)
