# app/lambdas/put_env/handler.py
import json

from env_registry.config import build_store, configure_logging, load_settings
from env_registry.service import EnvironmentRegistry

settings = load_settings()
logger = configure_logging(settings)

registry = EnvironmentRegistry(build_store(settings))


def lambda_handler(event, context):
    """
    PUT /environments: create or replace the record in the request body,
    keyed by its envName.
    """
    logger.info("Received event: %s", json.dumps(event))
    return registry.upsert_from_event(event)
