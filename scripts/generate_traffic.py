#!/usr/bin/env python3
"""Traffic generator for the sample-app API.

Drives a running instance through every endpoint so that app.log and
error.log fill with a realistic mix of info, warning and error records,
ready to be picked up by Filebeat or Logstash.

Usage:
    python scripts/generate_traffic.py
    python scripts/generate_traffic.py --base-url http://127.0.0.1:3000 --rounds 20
"""

import argparse
import asyncio
import random
from datetime import datetime

import httpx

# =============================================================================
# Configuration
# =============================================================================

BASE_URL = "http://127.0.0.1:3000"

NAMES = ["Ada", "Grace", "Linus", "Margaret", "Ken", "Barbara"]
ERROR_TYPES = ["generic", "database", "validation", "timeout"]


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f" {title}")
    print("=" * 70)


def print_response(label: str, response: httpx.Response) -> None:
    request_id = response.headers.get("X-Request-ID", "-")
    print(f"   {label:<32} {response.status_code}  request_id={request_id}")


# =============================================================================
# Traffic
# =============================================================================


async def check_service(client: httpx.AsyncClient) -> bool:
    """Wait for the readiness probe before sending traffic."""
    print_section("1. Readiness")

    for _ in range(10):
        try:
            r = await client.get("/ready")
        except httpx.ConnectError:
            print("   Service not reachable, retrying...")
        else:
            print_response("GET /ready", r)
            if r.status_code == 200:
                return True
        await asyncio.sleep(1)

    return False


async def user_round(client: httpx.AsyncClient) -> None:
    """One create/read/update/delete cycle plus a few expected failures."""
    name = random.choice(NAMES)

    r = await client.post("/api/users", json={
        "name": name,
        "email": f"{name.lower()}.{random.randint(1000, 9999)}@example.com",
    })
    print_response("POST /api/users", r)
    user_id = r.json()["user"]["id"]

    r = await client.get("/api/users")
    print_response("GET /api/users", r)

    r = await client.get(f"/api/users/{user_id}")
    print_response(f"GET /api/users/{user_id}", r)

    r = await client.put(f"/api/users/{user_id}", json={"name": random.choice(NAMES)})
    print_response(f"PUT /api/users/{user_id}", r)

    r = await client.delete(f"/api/users/{user_id}")
    print_response(f"DELETE /api/users/{user_id}", r)

    # Expected failures: warnings and error-level request completions
    r = await client.get(f"/api/users/{user_id}")
    print_response(f"GET /api/users/{user_id} (gone)", r)

    r = await client.post("/api/users", json={"name": name})
    print_response("POST /api/users (no email)", r)


async def error_round(client: httpx.AsyncClient) -> None:
    """Trigger a simulated error of a random type."""
    error_type = random.choice(ERROR_TYPES)
    r = await client.post("/api/simulate-error", json={"type": error_type})
    print_response(f"POST /api/simulate-error ({error_type})", r)


async def generate_traffic(base_url: str, rounds: int, error_rate: float) -> None:
    print_section("sample-app Traffic Generator")
    print(f"\nStarted: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"Base URL: {base_url}")

    async with httpx.AsyncClient(base_url=base_url, timeout=10.0) as client:
        if not await check_service(client):
            print("\n   Service never became ready, giving up.")
            return

        print_section("2. Health and info")
        for path in ("/", "/api/health", "/health", "/info"):
            r = await client.get(path)
            print_response(f"GET {path}", r)

        print_section(f"3. User traffic ({rounds} rounds)")
        for i in range(1, rounds + 1):
            print(f"\n # Round {i}")
            await user_round(client)
            if random.random() < error_rate:
                await error_round(client)

            r = await client.get("/api/hello", params={"name": random.choice(NAMES)})
            print_response("GET /api/hello", r)

        print_section("4. Metrics")
        r = await client.get("/metrics")
        total = sum(
            float(line.rsplit(" ", 1)[1])
            for line in r.text.splitlines()
            if line.startswith("sample_app_http_requests_total{")
        )
        print(f"   Requests recorded by the service: {int(total)}")

    print("\n" + "=" * 70)
    print(" Traffic Complete")
    print("=" * 70)


# =============================================================================
# Main
# =============================================================================


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate log traffic against sample-app")
    parser.add_argument("--base-url", default=BASE_URL)
    parser.add_argument("--rounds", type=int, default=10)
    parser.add_argument(
        "--error-rate",
        type=float,
        default=0.3,
        help="Probability of a simulated error per round",
    )
    args = parser.parse_args()

    asyncio.run(generate_traffic(args.base_url, args.rounds, args.error_rate))


if __name__ == "__main__":
    main()
