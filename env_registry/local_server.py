# env_registry/local_server.py
"""Local stand-in for the HTTP API front door.

Each Flask request is turned into an HTTP API (payload v2) event and
dispatched through the registry, so the handlers see the same shape of
input they get behind API Gateway.
"""
import base64
import logging
from typing import Any, Dict, Optional

from flask import Flask, Response, request

from env_registry.service import (
    ROUTE_DELETE,
    ROUTE_GET,
    ROUTE_LIST,
    ROUTE_PUT,
    EnvironmentRegistry,
)

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Methods": "GET, PUT, DELETE",
    "Access-Control-Allow-Headers": "Content-Type, X-Amz-Date, Authorization, X-Api-Key",
}


def build_event(route_key: str, env_name: Optional[str] = None) -> Dict[str, Any]:
    method, _, _ = route_key.partition(" ")
    raw = request.get_data()
    event: Dict[str, Any] = {
        "version": "2.0",
        "routeKey": route_key,
        "rawPath": request.path,
        "headers": dict(request.headers),
        "requestContext": {
            "http": {
                "method": method,
                "path": request.path,
                "sourceIp": request.remote_addr,
            },
        },
        "pathParameters": {"envName": env_name} if env_name is not None else None,
        "isBase64Encoded": False,
    }
    if raw:
        try:
            event["body"] = raw.decode("utf-8")
        except UnicodeDecodeError:
            event["body"] = base64.b64encode(raw).decode("ascii")
            event["isBase64Encoded"] = True
    return event


def create_app(registry: EnvironmentRegistry) -> Flask:
    app = Flask(__name__)

    def invoke(route_key: str, env_name: Optional[str] = None) -> Response:
        result = registry.dispatch(build_event(route_key, env_name))
        logger.info("%s -> %s", route_key, result["statusCode"])
        return Response(result["body"], status=result["statusCode"], headers=result["headers"])

    @app.route("/environments", methods=["GET"])
    def list_environments():
        return invoke(ROUTE_LIST)

    @app.route("/environments", methods=["PUT"])
    def put_environment():
        return invoke(ROUTE_PUT)

    @app.route("/environments/<env_name>", methods=["GET"])
    def get_environment(env_name):
        return invoke(ROUTE_GET, env_name)

    @app.route("/environments/<env_name>", methods=["DELETE"])
    def delete_environment(env_name):
        return invoke(ROUTE_DELETE, env_name)

    @app.after_request
    def add_cors_headers(response):
        response.headers.update(CORS_HEADERS)
        return response

    return app
