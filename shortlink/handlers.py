"""HTTP handlers exposing the URL service as a Flask application."""

from __future__ import annotations

from datetime import datetime, timedelta
from http import HTTPStatus
from urllib.parse import urlsplit

from flask import Flask, jsonify, redirect, request

from shortlink.model import Shorten
from shortlink.service import ExistsError, NotFoundError, URLService

_ZERO_TIME = "0001-01-01T00:00:00Z"


def validate_url(raw: str) -> bool:
    """Return True if ``raw`` is an absolute http or https URL with a host."""
    if not isinstance(raw, str) or not raw:
        return False
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in raw):
        return False
    try:
        parts = urlsplit(raw)
        parts.port  # validates the port part
    except ValueError:
        return False
    if parts.scheme not in ("http", "https"):
        return False
    host = parts.netloc.rpartition("@")[2]
    if not host or any(ch.isspace() for ch in host):
        return False
    return True


def _rfc3339(moment: datetime | None) -> str:
    if moment is None:
        return _ZERO_TIME
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    offset = moment.utcoffset()
    if offset is None or offset == timedelta(0):
        return text + "Z"
    sign = "+" if offset > timedelta(0) else "-"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _error(message: str, status: HTTPStatus):
    return jsonify({"error": message}), status


def _stat_body(stat: Shorten) -> dict:
    return {
        "short_url": stat.short_url,
        "original_url": stat.original_url,
        "visit_count": stat.visits,
        "created_at": _rfc3339(stat.created_at),
        "updated_at": _rfc3339(stat.updated_at),
    }


def create_app(url_service: URLService) -> Flask:
    """Build the Flask application serving ``url_service``."""
    app = Flask(__name__)

    @app.post("/api/shorten")
    def shorten_url():
        body = request.get_json(force=True, silent=True)
        url = body.get("url") if isinstance(body, dict) else None
        if not isinstance(url, str) or not url:
            return _error("Invalid request format", HTTPStatus.BAD_REQUEST)
        if not validate_url(url):
            return _error(
                "Invalid URL format. URL must start with http:// or https://",
                HTTPStatus.BAD_REQUEST,
            )
        try:
            shorten = url_service.create(url)
        except ExistsError:
            return _error("URL already exists", HTTPStatus.CONFLICT)
        except Exception:
            return _error("Failed to create short URL", HTTPStatus.INTERNAL_SERVER_ERROR)
        return jsonify({"short_url": shorten.short_url}), HTTPStatus.CREATED

    @app.get("/<short>")
    def redirect_short(short: str):
        if not short:
            return _error("Short URL is required", HTTPStatus.BAD_REQUEST)
        try:
            original = url_service.resolve(short)
        except NotFoundError:
            return _error("URL not found", HTTPStatus.NOT_FOUND)
        except Exception:
            return _error("Failed to resolve URL", HTTPStatus.INTERNAL_SERVER_ERROR)
        return redirect(original, code=HTTPStatus.FOUND)

    @app.get("/api/stat/<short>")
    def stat(short: str):
        try:
            record = url_service.get_stat(short)
        except NotFoundError:
            return _error("URL not found", HTTPStatus.NOT_FOUND)
        except Exception:
            return _error("Failed to get stat", HTTPStatus.INTERNAL_SERVER_ERROR)
        return jsonify(_stat_body(record)), HTTPStatus.OK

    return app