"""Cloud Function Entry Points.

This module provides the HTTP entry points for Google Cloud Functions.
They are thin wrappers that load configuration, parse the request and
invoke the feed.
"""

import logging
import os
import json
from typing import Any

import functions_framework
from flask import Request

from src.core.config import Config
from src.core.message import Coordinate
from src.core.validation import ValidationError, validate_coordinates
from src.feed import FeedRequest, NearbyFeed, SortOrder
from src.shell.config_loader import load_config, load_config_from_env


# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _get_config() -> Config:
    """Load configuration from file or environment."""
    config_path = os.environ.get("CONFIG_PATH")

    if config_path:
        return load_config(config_path)
    elif os.environ.get("FIRESTORE_DATABASE"):
        # Simple env-based config
        return load_config_from_env()
    else:
        # Try default config path
        return load_config()


def _error(message: str, status: int, errors: list[ValidationError] | None = None) -> tuple[dict[str, Any], int]:
    body: dict[str, Any] = {"status": "error", "message": message}
    if errors:
        body["errors"] = [{"field": e.field, "message": e.message} for e in errors]
    return body, status


def _parse_feed_request(request: Request, config: Config) -> tuple[FeedRequest | None, list[ValidationError]]:
    """Turn query parameters into a FeedRequest.

    Returns:
        (FeedRequest, []) on success, (None, errors) otherwise
    """
    args = request.args
    errors: list[ValidationError] = []

    viewer = None
    lat_raw, lng_raw = args.get("lat"), args.get("lng")
    if lat_raw is not None or lng_raw is not None:
        try:
            lat, lng = float(lat_raw), float(lng_raw)
        except (TypeError, ValueError):
            errors.append(ValidationError(
                field="location",
                message="Both lat and lng must be numbers",
            ))
        else:
            coordinate_errors = validate_coordinates(lat, lng, "location")
            errors.extend(coordinate_errors)
            if not coordinate_errors:
                viewer = Coordinate(latitude=lat, longitude=lng)

    sort_raw = args.get("sort", config.default_sort)
    try:
        sort = SortOrder(sort_raw)
    except ValueError:
        errors.append(ValidationError(
            field="sort",
            message=f"Unknown sort order '{sort_raw}'",
        ))
        sort = SortOrder.DATE

    radius_km = config.default_radius_km
    if args.get("radius_km") is not None:
        try:
            radius_km = float(args["radius_km"])
        except ValueError:
            errors.append(ValidationError(
                field="radius_km",
                message="radius_km must be a number",
            ))
        else:
            if not radius_km > 0:
                errors.append(ValidationError(
                    field="radius_km",
                    message=f"Radius must be positive, got {radius_km}",
                ))

    if errors:
        return None, errors

    return FeedRequest(
        viewer=viewer,
        query=args.get("q", ""),
        sort=sort,
        radius_km=radius_km,
    ), []


@functions_framework.http
def nearby_messages(request: Request) -> tuple[dict[str, Any], int]:
    """HTTP Cloud Function entry point for browsing messages.

    Query parameters: lat, lng, q, sort, radius_km.

    Args:
        request: Flask request object

    Returns:
        Tuple of (response dict, HTTP status code)
    """
    try:
        config = _get_config()

        feed_request, errors = _parse_feed_request(request, config)
        if feed_request is None:
            logger.info("Rejected feed request: %d invalid parameters", len(errors))
            return _error("Invalid request parameters", 400, errors)

        result = NearbyFeed(config).build(feed_request)

        response: dict[str, Any] = {
            "status": "success" if result.success else "partial_failure",
            "summary": result.summary,
            "count": len(result.entries),
            "messages": [entry.to_dict() for entry in result.entries],
        }

        if result.errors:
            response["errors"] = result.errors

        status_code = 200 if result.success else 207  # 207 = Multi-Status
        return response, status_code

    except Exception as e:
        logger.exception("Unexpected error building message feed")
        return _error(str(e), 500)


@functions_framework.http
def post_message(request: Request) -> tuple[dict[str, Any], int]:
    """HTTP Cloud Function entry point for posting a message.

    Expects a JSON body with message, latitude, longitude and optional
    userId, userEmail, userName, userPhotoURL.

    Args:
        request: Flask request object

    Returns:
        Tuple of (response dict, HTTP status code)
    """
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return _error("Request body must be a JSON object", 400)

        result = NearbyFeed(_get_config()).post(data)

        if result.errors:
            return _error("Missing or invalid fields", 400, result.errors)

        if not result.success:
            return _error("Failed to store message", 500)

        return {
            "status": "success",
            "id": result.message_id,
            "message": "Message created successfully",
        }, 201

    except Exception as e:
        logger.exception("Unexpected error posting message")
        return _error(str(e), 500)


# For local testing
if __name__ == "__main__":
    from flask import Flask

    print("Building nearby feed locally...")

    app = Flask(__name__)
    with app.test_request_context("/?lat=40.7128&lng=-74.0060&sort=distance_asc"):
        from flask import request as local_request

        response, status = nearby_messages(local_request)

    print(f"\nResponse ({status}):")
    print(json.dumps(response, indent=2))
