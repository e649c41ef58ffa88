#!/usr/bin/env python3
"""Health check script for the dbt-core-interface server"""

import argparse
import asyncio
import sys

from src.config.settings import get_config
from src.utils.http_client import DbtInterface


def check_server(host: str | None = None, port: int | None = None) -> dict:
    """Health check for the dbt-core-interface server"""
    config = get_config()
    config.override_from_cli({"host": host, "port": port})

    interface = DbtInterface(None, None, "", config=config)
    if asyncio.run(interface.health_check()):
        return {"status": "healthy", "reason": f"{config.base_url}/health returned 200"}
    return {"status": "unhealthy", "reason": f"{config.base_url}/health unreachable or not ready"}


def main():
    parser = argparse.ArgumentParser(description="Health check for the dbt-core-interface server")
    parser.add_argument("--host", help="Server host (default: configured host)")
    parser.add_argument("--port", type=int, help="Server port (default: configured port)")

    args = parser.parse_args()
    result = check_server(args.host, args.port)

    print(f"Health check result: {result}")

    if result["status"] == "healthy":
        sys.exit(0)
    else:
        print(f"Service unhealthy: {result['reason']}")
        sys.exit(1)


if __name__ == "__main__":
    main()
