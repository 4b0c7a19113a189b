"""
Concurrency Simulation Script

Fires concurrent order traffic at a running server and checks that the
store kept its bookkeeping straight:
    - every order total equals the sum of its lines
    - order numbers are unique
    - concurrent item additions to one order are all applied

Run from project root (server must be up): python scripts/simulate.py
"""

import argparse
import asyncio
import random
import sys
import time
from datetime import date
from typing import Any

import httpx

API_BASE_URL = "http://localhost:8080"
PASSPHRASE = "letmein"
TOTAL_ORDERS = 50

GUEST_NAMES = ["A. Rao", "S. Iyer", "M. Khan", "P. Shetty", "R. Das", "K. Menon", "J. Dsouza"]
ROOMS = ["101", "102", "104", "201", "203", "305", "Lawn"]


async def fetch_menu(client: httpx.AsyncClient) -> list[dict[str, Any]]:
    response = await client.get(f"{API_BASE_URL}/api/menu")
    response.raise_for_status()
    return [item for category in response.json()["categories"] for item in category["items"]]


def random_items(menu: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [
        {
            "item_key": item["id"],
            "name": item["name"],
            "price": item["price"],
            "qty": random.randint(1, 3),
        }
        for item in random.sample(menu, random.randint(1, 4))
    ]


async def place_order(
    client: httpx.AsyncClient,
    menu: list[dict[str, Any]],
    order_num: int,
) -> dict[str, Any]:
    """Place one random order and time it."""
    payload = {
        "guest_name": random.choice(GUEST_NAMES),
        "room_no": random.choice(ROOMS),
        "notes": "",
        "menu_version": "RestoVersion",
        "items": random_items(menu),
    }
    start_time = time.time()

    try:
        response = await client.post(f"{API_BASE_URL}/api/orders", json=payload, timeout=30.0)
        elapsed = round(time.time() - start_time, 3)
        if response.status_code == 200:
            data = response.json()
            return {"order_num": order_num, "success": True, "order": data, "time": elapsed}
        return {"order_num": order_num, "success": False, "error": response.text[:100], "time": elapsed}
    except httpx.HTTPError as e:
        elapsed = round(time.time() - start_time, 3)
        return {"order_num": order_num, "success": False, "error": str(e)[:100], "time": elapsed}


async def hammer_one_order(
    client: httpx.AsyncClient,
    menu: list[dict[str, Any]],
    order_id: str,
    additions: int,
) -> int:
    """Add one line at a time to the same order, concurrently. Returns the expected added sum."""
    picks = [random.choice(menu) for _ in range(additions)]

    async def add(item: dict[str, Any]) -> None:
        response = await client.post(
            f"{API_BASE_URL}/api/orders/{order_id}/items",
            json={"items": [{"item_key": item["id"], "name": item["name"], "price": item["price"]}]},
        )
        response.raise_for_status()

    await asyncio.gather(*(add(item) for item in picks))
    return sum(item["price"] for item in picks)


async def run_simulation(num_orders: int = TOTAL_ORDERS, additions: int = 20) -> bool:
    print("=" * 70)
    print("CONCURRENCY SIMULATION")
    print("=" * 70)
    print(f"Orders: {num_orders} | Concurrent additions: {additions} | Target: {API_BASE_URL}")

    headers = {"x-passphrase": PASSPHRASE}
    start_time = time.time()

    async with httpx.AsyncClient(headers=headers) as client:
        menu = await fetch_menu(client)

        results = await asyncio.gather(
            *(place_order(client, menu, i + 1) for i in range(num_orders))
        )
        successful = [r for r in results if r["success"]]
        failed = [r for r in results if not r["success"]]

        ok = True

        order_numbers = [r["order"]["order_no"] for r in successful]
        if len(set(order_numbers)) != len(order_numbers):
            print("Duplicate order numbers issued!")
            ok = False

        for r in successful:
            order = r["order"]
            expected = sum(i["price"] * i["qty"] for i in order["items"])
            if order["total"] != expected:
                print(f"Order {order['order_no']} total {order['total']} != {expected}")
                ok = False

        if successful:
            target = successful[0]["order"]
            added = await hammer_one_order(client, menu, target["id"], additions)
            response = await client.get(f"{API_BASE_URL}/api/orders/{target['id']}")
            final = response.json()
            if final["total"] != target["total"] + added:
                print(f"Lost update on {final['order_no']}: {final['total']} != {target['total'] + added}")
                ok = False
            if len(final["items"]) != len(target["items"]) + additions:
                print(f"Lost lines on {final['order_no']}")
                ok = False

        export = await client.get(f"{API_BASE_URL}/api/export/csv", params={"date": date.today().isoformat()})

    total_time = round(time.time() - start_time, 2)

    print(f"\nSuccessful Orders: {len(successful)}/{num_orders}")
    print(f"Failed Orders: {len(failed)}/{num_orders}")
    print(f"Total Time: {total_time}s")
    if successful:
        avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
        print(f"Average Response: {avg_time}s")
    for f in failed[:5]:
        print(f"   Order #{f['order_num']}: {f.get('error', 'Unknown error')}")
    print(f"Export rows today: {len(export.text.splitlines()) - 1}")
    print("=" * 70)
    print("ALL CHECKS PASSED" if ok else "CHECKS FAILED")
    print("=" * 70)
    return ok


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Concurrency Simulation Script")
    parser.add_argument("--orders", type=int, default=TOTAL_ORDERS, help="Number of orders")
    parser.add_argument("--additions", type=int, default=20, help="Concurrent additions to one order")
    parser.add_argument("--url", default=API_BASE_URL, help="Server base URL")
    parser.add_argument("--passphrase", default=PASSPHRASE, help="Staff passphrase")
    args = parser.parse_args()

    API_BASE_URL = args.url.rstrip("/")
    PASSPHRASE = args.passphrase

    passed = asyncio.run(run_simulation(args.orders, args.additions))
    sys.exit(0 if passed else 1)
