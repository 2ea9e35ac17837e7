# env_registry/cli.py
"""
Environment registry CLI
========================
Developer access to the registry without going through API Gateway.

Example usage:
  # Store a record (YAML or JSON file with an envName field)
  env-registry put prod.yaml

  # Read it back, list everything, remove it
  env-registry get prod
  env-registry list
  env-registry delete prod

  # Serve the HTTP routes locally, backed by an in-memory table
  env-registry serve --memory --port 8080
  curl -X PUT -H "Content-Type: application/json" \
       --data '{"envName": "dev"}' http://localhost:8080/environments
"""
import argparse
import json
import logging
import sys

import yaml

from env_registry.config import build_store, load_settings
from env_registry.service import EnvironmentRegistry
from env_registry.store import InMemoryEnvironmentStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="env-registry", description="Environment registry CLI")
    parser.add_argument("--table", help="DynamoDB table name (default: $TABLE_NAME or environments)")
    parser.add_argument("--region", help="AWS region (default: $AWS_REGION)")
    parser.add_argument("--endpoint-url", help="DynamoDB endpoint, e.g. DynamoDB Local")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List every environment record")

    g = sub.add_parser("get", help="Fetch one environment record")
    g.add_argument("env_name", help="envName of the record")

    p = sub.add_parser("put", help="Create or replace a record from a YAML/JSON file")
    p.add_argument("input", help="Path to record file ('-' reads JSON from stdin)")

    d = sub.add_parser("delete", help="Delete an environment record")
    d.add_argument("env_name", help="envName of the record")

    s = sub.add_parser("serve", help="Run the HTTP routes on a local Flask server")
    s.add_argument("--host", default="127.0.0.1", help="Bind address (default 127.0.0.1)")
    s.add_argument("--port", default=8080, type=int, help="Port (default 8080)")
    s.add_argument("--memory", action="store_true", help="Use an in-memory table instead of DynamoDB")

    return parser


def read_record_body(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        if path.endswith((".yaml", ".yml")):
            return json.dumps(yaml.safe_load(f), default=str)
        return f.read()


def make_registry(args) -> EnvironmentRegistry:
    if getattr(args, "memory", False):
        return EnvironmentRegistry(InMemoryEnvironmentStore())

    settings = load_settings()
    if args.table:
        settings.table_name = args.table
    if args.region:
        settings.region = args.region
    if args.endpoint_url:
        settings.endpoint_url = args.endpoint_url
    return EnvironmentRegistry(build_store(settings))


def cli(argv=None) -> int:
    args = build_parser().parse_args(argv)
    log_level = getattr(logging, load_settings().log_level, logging.INFO)
    logging.basicConfig(level=log_level, format="%(levelname)s %(name)s: %(message)s")
    registry = make_registry(args)

    if args.command == "serve":
        from env_registry.local_server import create_app

        print(f"[*] Environment registry listening on http://{args.host}:{args.port}")
        create_app(registry).run(host=args.host, port=args.port, threaded=True)
        return 0

    if args.command == "list":
        result = registry.list_environments()
    elif args.command == "get":
        result = registry.get_environment(args.env_name)
    elif args.command == "put":
        result = registry.upsert_environment(read_record_body(args.input))
    else:
        result = registry.delete_environment(args.env_name)

    print(json.dumps(json.loads(result["body"]), indent=2))
    return 0 if result["statusCode"] == 200 else 1


def main():
    sys.exit(cli())


if __name__ == "__main__":
    main()
