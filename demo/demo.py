"""
dsngate demo: send one Sentry store request and print the resolved DSN.

Usage:
    python demo.py --public-key <32 hex chars> [--secret-key <32 hex chars>] [--project 1234]

Exit codes:
    0  success
    1  request rejected (4xx) or other error
"""

import argparse
import sys

import httpx


DSNGATE_BASE_URL = "http://localhost:8081"
EVENT = {"message": "Hello from the dsngate demo", "level": "info"}


def main() -> None:
    parser = argparse.ArgumentParser(description="dsngate demo")
    parser.add_argument("--public-key", required=True, help="sentry_key to send")
    parser.add_argument("--secret-key", default="", help="optional sentry_secret")
    parser.add_argument("--project", default="", help="project id; empty hits the legacy /api/store/")
    args = parser.parse_args()

    auth = f"Sentry sentry_version=7, sentry_client=dsngate-demo/0.1, sentry_key={args.public_key}"
    if args.secret_key:
        auth += f", sentry_secret={args.secret_key}"
    path = f"/api/{args.project}/store/" if args.project else "/api/store/"

    try:
        resp = httpx.post(
            DSNGATE_BASE_URL + path,
            json=EVENT,
            headers={"X-Sentry-Auth": auth, "Host": "sentry.io"},
        )
        resp.raise_for_status()
    except httpx.HTTPStatusError as exc:
        print(f"Request rejected ({exc.response.status_code}): {exc.response.text}", file=sys.stderr)
        sys.exit(1)
    except httpx.HTTPError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    result = resp.json()
    print(result["dsn"] or f"legacy endpoint, public key {result['public_key']}")


if __name__ == "__main__":
    main()
