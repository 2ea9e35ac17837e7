# env_registry/codec.py
import base64
import binascii
import json
from decimal import Decimal
from typing import Any, Dict, Optional

from boto3.dynamodb.types import Binary

from env_registry.errors import MalformedRecordError, MissingKeyError

KEY_FIELD = "envName"


def _json_default(value):
    # DynamoDB hands numbers back as Decimal
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, (set, frozenset)):
        return sorted(_json_default(v) if isinstance(v, (Decimal, Binary)) else v for v in value)
    if isinstance(value, Binary):
        return base64.b64encode(value.value).decode("ascii")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dumps(payload: Any) -> str:
    return json.dumps(payload, default=_json_default)


def body_from_event(event: Dict[str, Any]) -> Optional[str]:
    """Return the raw request body, undoing API Gateway's base64 wrapping."""
    body = event.get("body")
    if body is None or not event.get("isBase64Encoded"):
        return body
    try:
        return base64.b64decode(body, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise MalformedRecordError(f"Body is not valid base64 text: {e}")


def env_name_from_path(event: Dict[str, Any]) -> Optional[str]:
    params = event.get("pathParameters") or {}
    return params.get(KEY_FIELD)


def require_env_name(env_name: Any) -> str:
    if not isinstance(env_name, str) or not env_name:
        raise MissingKeyError(f"Missing required key: {KEY_FIELD}")
    return env_name


def _reject_constant(name):
    raise MalformedRecordError(f"Request body contains non-finite number: {name}")


def parse_record(body: Optional[str]) -> Dict[str, Any]:
    """Decode an upsert body into a record.

    Fractional numbers become Decimal because the DynamoDB serializer
    refuses floats; NaN and Infinity are rejected outright. The record
    must be a JSON object carrying a non-empty string envName; nothing
    else about its shape is checked.
    """
    if body is None:
        raise MalformedRecordError("Request body is required")
    try:
        record = json.loads(body, parse_float=Decimal, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise MalformedRecordError(f"Request body is not valid JSON: {e}")
    if not isinstance(record, dict):
        raise MalformedRecordError("Request body must be a JSON object")
    require_env_name(record.get(KEY_FIELD))
    return record
