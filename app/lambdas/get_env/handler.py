# app/lambdas/get_env/handler.py
import json

from env_registry.config import build_store, configure_logging, load_settings
from env_registry.service import READ_ROUTES, EnvironmentRegistry

settings = load_settings()
logger = configure_logging(settings)

registry = EnvironmentRegistry(build_store(settings))


def lambda_handler(event, context):
    """
    Serves GET /environments (full listing) and GET /environments/{envName}.
    Any other routeKey is answered with a 400.
    """
    logger.info("Received event: %s", json.dumps(event))
    return registry.dispatch(event, routes=READ_ROUTES)
