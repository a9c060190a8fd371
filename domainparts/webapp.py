from __future__ import annotations
import argparse
import logging
from flask import Flask, Response, jsonify, request
from .config import Config
from .errors import DomainPartsError, SuffixListConfigError
from .extractor import DomainExtractor
from .logging_setup import setup_logging

log = logging.getLogger(__name__)


def _flag(value: str | None) -> bool:
    return (value or "").lower() in ("1", "true", "yes", "on")


def create_app(extractor: DomainExtractor, auth: dict | None = None) -> Flask:
    """Create the Flask lookup API around an already loaded extractor."""
    app = Flask(__name__)
    basic_auth = auth or {"enabled": False}

    def _check_auth():
        if not basic_auth.get("enabled"):
            return True
        u = request.authorization.username if request.authorization else None
        p = request.authorization.password if request.authorization else None
        return (u == basic_auth.get("username") and p == basic_auth.get("password"))

    def _auth_required():
        return Response("Authentication required", 401, {"WWW-Authenticate": 'Basic realm="domainparts"'})

    @app.route("/api/extract")
    def api_extract():
        if not _check_auth():
            return _auth_required()
        url = request.args.get("url")
        if not url:
            return jsonify({"error": "missing url parameter"}), 400
        res = extractor.extract(
            url,
            ignore_subdomains=_flag(request.args.get("ignore_subdomains")),
            convert_to_punycode=_flag(request.args.get("punycode")),
        )
        return jsonify(res.to_dict())

    @app.route("/api/update", methods=["POST"])
    def api_update():
        if not _check_auth():
            return _auth_required()
        try:
            extractor.update()
        except SuffixListConfigError as e:
            return jsonify({"error": str(e)}), 409
        except DomainPartsError as e:
            log.exception("Suffix list update failed")
            return jsonify({"error": str(e)}), 502
        return jsonify({"rules": len(extractor.trie)})

    return app


if __name__ == "__main__":
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", required=True)
    args = ap.parse_args()
    cfg = Config.load(args.config)
    setup_logging(cfg.data)
    web = cfg.section("web")
    app = create_app(DomainExtractor.from_config(cfg), auth=web.get("basic_auth"))
    app.run(host=web.get("host", "127.0.0.1"), port=int(web.get("port", 8091)))
