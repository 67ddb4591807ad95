from __future__ import annotations

import logging
from typing import Mapping, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from .booking import BookingRequest, build_message
from .config import SETTINGS, configure_logging
from .errors import DeliveryError, InvalidQueryError, UpstreamFetchError, ValidationError
from .images import DEFAULT_LIMIT, DEFAULT_PAGE, IMAGE_SERVICE, ImageQueryService
from .infrastructure.mailer import MAILER, SmtpMailer

APP_VERSION = "1.0.0"

logger = logging.getLogger(__name__)


def parse_positive_int(args: Mapping[str, str], name: str, default: int) -> int:
    raw = args.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise InvalidQueryError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise InvalidQueryError(f"{name} must be at least 1, got {value}")
    return value


def create_app(
    image_service: Optional[ImageQueryService] = None,
    mailer: Optional[SmtpMailer] = None,
) -> Flask:
    configure_logging()
    images = image_service or IMAGE_SERVICE
    delivery = mailer or MAILER

    app = Flask(__name__)
    CORS(app, origins=SETTINGS.cors_origins)

    @app.route("/api/images")
    def list_images():
        try:
            page = parse_positive_int(request.args, "page", DEFAULT_PAGE)
            limit = parse_positive_int(request.args, "limit", DEFAULT_LIMIT)
        except InvalidQueryError as exc:
            logger.warning("Rejected image listing request: %s", exc.message)
            return (
                jsonify(error="Invalid pagination parameters", details=exc.message),
                exc.status_code,
            )

        category = request.args.get("category") or None
        try:
            result = images.list_images(page=page, limit=limit, category=category)
        except UpstreamFetchError as exc:
            return jsonify(error=exc.message), exc.status_code
        return jsonify(result.to_dict())

    @app.route("/api/send-email", methods=["POST"])
    def send_email():
        try:
            booking = BookingRequest.from_payload(request.get_json(silent=True))
        except ValidationError as exc:
            logger.warning("Rejected booking request, missing %s", ", ".join(exc.missing))
            return (
                jsonify(error=exc.message, required=exc.required, missing=exc.missing),
                exc.status_code,
            )

        try:
            message_id = delivery.send(build_message(booking))
        except (DeliveryError, ValueError) as exc:
            logger.exception("Email sending error")
            return jsonify(error="Failed to send email", details=str(exc)), 500

        logger.info("Email sent successfully: %s", message_id)
        return jsonify(
            success=True,
            message="Booking email sent successfully",
            messageId=message_id,
        )

    @app.route("/health")
    def health():
        return jsonify(ok=True, version=APP_VERSION, cachedPages=len(images.cache))

    return app


# Expose a module-level Flask application for Gunicorn import paths like ``gallery_relay.app:app``
# and provide a conventional ``application`` alias for WSGI servers that default to that name.
app = create_app()
application = app
