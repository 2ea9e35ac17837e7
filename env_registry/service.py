# env_registry/service.py
import logging
from typing import Any, Callable, Dict, Iterable, Optional

from env_registry import codec
from env_registry.errors import RegistryError, UnsupportedRouteError
from env_registry.store import EnvironmentStore

logger = logging.getLogger(__name__)

ROUTE_LIST = "GET /environments"
ROUTE_GET = "GET /environments/{envName}"
ROUTE_PUT = "PUT /environments"
ROUTE_DELETE = "DELETE /environments/{envName}"

READ_ROUTES = (ROUTE_LIST, ROUTE_GET)
ALL_ROUTES = (ROUTE_LIST, ROUTE_GET, ROUTE_PUT, ROUTE_DELETE)

JSON_HEADERS = {"Content-Type": "application/json"}


def make_response(status_code: int, payload: Any) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": dict(JSON_HEADERS),
        "body": codec.dumps(payload),
    }


class EnvironmentRegistry:
    """The four environment operations, each one store call wide.

    Every public method returns an API Gateway proxy response. Handled
    failures (bad body, missing envName, store errors) come back as 400
    with the error message as a JSON string body.
    """

    def __init__(self, store: EnvironmentStore):
        self.store = store

    def _failure(self, action: str, error: RegistryError) -> Dict[str, Any]:
        logger.warning("%s failed: %s", action, error)
        return make_response(400, str(error))

    def _respond(self, action: str, operation: Callable[[], Any]) -> Dict[str, Any]:
        try:
            payload = operation()
        except RegistryError as e:
            return self._failure(action, e)
        return make_response(200, payload)

    def list_environments(self) -> Dict[str, Any]:
        return self._respond("List envs", self.store.list)

    def get_environment(self, env_name: Optional[str]) -> Dict[str, Any]:
        def operation():
            record = self.store.get(codec.require_env_name(env_name))
            # absent keys are a successful empty result, not a 404
            return record if record is not None else {}

        return self._respond("Get env", operation)

    def _put(self, body: Optional[str]) -> str:
        record = codec.parse_record(body)
        env_name = record[codec.KEY_FIELD]
        self.store.put(record)
        logger.info("Put env %s", env_name)
        return f"Put env {env_name}"

    def upsert_environment(self, body: Optional[str]) -> Dict[str, Any]:
        return self._respond("Put env", lambda: self._put(body))

    def upsert_from_event(self, event: Dict[str, Any]) -> Dict[str, Any]:
        """Upsert the body of an API Gateway event, base64 wrapping included."""
        return self._respond("Put env", lambda: self._put(codec.body_from_event(event)))

    def delete_environment(self, env_name: Optional[str]) -> Dict[str, Any]:
        def operation():
            name = codec.require_env_name(env_name)
            self.store.delete(name)
            logger.info("Deleted env %s", name)
            return f"Deleted env {name}"

        return self._respond("Delete env", operation)

    def dispatch(self, event: Dict[str, Any], routes: Iterable[str] = ALL_ROUTES) -> Dict[str, Any]:
        """Route an HTTP API (payload v2) event by its routeKey."""
        route = event.get("routeKey")
        if route not in routes:
            return self._failure("Dispatch", UnsupportedRouteError(f'Unsupported route: "{route}"'))

        if route == ROUTE_LIST:
            return self.list_environments()
        if route == ROUTE_GET:
            return self.get_environment(codec.env_name_from_path(event))
        if route == ROUTE_DELETE:
            return self.delete_environment(codec.env_name_from_path(event))
        return self.upsert_from_event(event)
