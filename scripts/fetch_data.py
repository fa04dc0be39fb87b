#!/usr/bin/env python3
"""
Download idioms and both category lists from a running deployment and
save them as one JSON file ({"idioms", "majorTypes", "minorTypes"}).
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Optional

import httpx

from app.config import get_settings

RETRIES = 3
RETRY_DELAY_SECONDS = 2
TIMEOUT_SECONDS = 30


async def fetch_with_retry(client: httpx.AsyncClient, url: str, retries: int = RETRIES) -> Any:
    attempt = 0
    while True:
        try:
            print(f"Fetching {url}...")
            response = await client.get(url)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError:
            if attempt >= retries:
                raise
            attempt += 1
            print(f"Retrying... {retries - attempt + 1} attempts left")
            await asyncio.sleep(RETRY_DELAY_SECONDS)


async def fetch_data(
    base_url: str,
    output: Path,
    verify: bool = True,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> None:
    async with httpx.AsyncClient(
        base_url=base_url, timeout=TIMEOUT_SECONDS, verify=verify, transport=transport
    ) as client:
        print("Fetching idioms...")
        idioms = await fetch_with_retry(client, "/idioms")
        print(f"Successfully fetched {len(idioms or [])} idioms")

        print("Fetching major types...")
        major_types = await fetch_with_retry(client, "/idiom_major_types?type_code=all")
        print(f"Successfully fetched {len(major_types or [])} major types")

        print("Fetching minor types...")
        minor_types = await fetch_with_retry(client, "/idiom_minor_types?type_code=all")
        print(f"Successfully fetched {len(minor_types or [])} minor types")

    data = {
        "idioms": idioms or [],
        "majorTypes": major_types or [],
        "minorTypes": minor_types or [],
    }
    output.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"Data saved to {output}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Fetch idiom data from a deployment")
    parser.add_argument(
        "--base-url",
        default=None,
        help="Deployment URL (default: CLIENT_BASE_URL)",
    )
    parser.add_argument(
        "--output",
        default=str(Path(__file__).parent / "cloudflare_data.json"),
        help="Output JSON file",
    )
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Skip TLS certificate verification",
    )
    args = parser.parse_args(argv)

    base_url = args.base_url or get_settings().client.base_url
    try:
        asyncio.run(fetch_data(base_url, Path(args.output), verify=not args.insecure))
    except httpx.HTTPError as e:
        print(f"✗ Network error: {e!r}")
        sys.exit(1)
    except (OSError, ValueError) as e:
        print(f"✗ Error fetching data: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
