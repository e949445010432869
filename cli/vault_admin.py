"""Operator CLI for checking the VaultGate document backend."""

from __future__ import annotations

import argparse
import asyncio
import os
import sys

import httpx

from vaultgate.exceptions import ServiceError
from vaultgate.services.script_client import ScriptClient

URL_ENV_VAR = "GOOGLE_APPS_SCRIPT_URL"
DEFAULT_TIMEOUT = 10.0


async def run_health(client: ScriptClient) -> int:
    result = await client.health()
    print(f"Backend status: {result.status}")
    if result.timestamp:
        print(f"Backend time:   {result.timestamp}")
    return 0 if result.status == "ok" else 1


async def run_access_count(client: ScriptClient, email: str) -> int:
    result = await client.get_access_count(email)
    if not result.success:
        print(f"Error: {result.error or 'lookup failed'}")
        return 1
    print(f"{email}: {result.count or 0} access(es)")
    return 0


async def run_files(client: ScriptClient) -> int:
    result = await client.list_files()
    if not result.success:
        print(f"Error: {result.error or 'listing failed'}")
        return 1
    files = result.files or []
    for file in files:
        target = file.embed_url or file.web_view_link or "-"
        print(f"  {file.icon:<8} {file.name}  ({file.type_label})  {target}")
    print(f"{len(files)} file(s)")
    return 0


async def _dispatch(args: argparse.Namespace) -> int:
    http_client = httpx.AsyncClient(timeout=args.timeout, follow_redirects=True)
    client = ScriptClient(args.url, http_client)
    try:
        if args.command == "health":
            return await run_health(client)
        if args.command == "access-count":
            return await run_access_count(client, args.email)
        return await run_files(client)
    finally:
        await client.aclose()


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="vaultgate-admin",
        description="Inspect the document backend behind a VaultGate portal",
    )
    parser.add_argument(
        "--url",
        "-u",
        default=os.environ.get(URL_ENV_VAR),
        help=f"Apps Script web app URL (default: ${URL_ENV_VAR})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT})",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("health", help="Check that the backend answers")
    count_parser = subparsers.add_parser("access-count", help="Show how often an email logged in")
    count_parser.add_argument("email")
    subparsers.add_parser("files", help="List files with their viewer URLs")

    args = parser.parse_args(argv)

    if not args.url:
        print(f"Error: no backend URL. Pass --url or set {URL_ENV_VAR}.")
        sys.exit(1)

    try:
        status = asyncio.run(_dispatch(args))
    except ServiceError as exc:
        print(f"Error: {exc.detail}")
        sys.exit(1)
    sys.exit(status)


if __name__ == "__main__":
    main()
