#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from typing import Any

import httpx
from httpx import ConnectError


def show(label: str, resp: httpx.Response) -> dict[str, Any]:
    body = resp.json() if resp.content else {}
    step = body.get("step_title") or body.get("detail") or ""
    total = (body.get("quote") or {}).get("total")
    print(f"{label:<10} {resp.status_code} {step} total={total}")
    for toast in body.get("toasts", []):
        print(f"  toast: {toast['title']}: {toast['description']}")
    for field, message in (body.get("errors") or {}).items():
        print(f"  {field}: {message}")
    return body


def main() -> None:
    parser = argparse.ArgumentParser(description="Walk one booking through the wizard against a running server")
    parser.add_argument("--base-url", default="http://127.0.0.1:8001")
    parser.add_argument("--service", default="standard", choices=["standard", "express", "sameday"])
    parser.add_argument("--quantity", type=int, default=2)
    parser.add_argument("--repaint", action="store_true")
    parser.add_argument("--delivery", default="dropoff", choices=["dropoff", "collection"])
    parser.add_argument("--address", default="", help="Pickup address, needed for collection")
    parser.add_argument("--name", default="Test Customer")
    parser.add_argument("--email", default="test.customer@example.com")
    args = parser.parse_args()

    client = httpx.Client(base_url=args.base_url, timeout=10.0)
    try:
        state = show("start", client.post("/api/booking"))
    except ConnectError:
        print("Connection refused. Is the FastAPI server running?")
        print("Try: uvicorn app.main:app --reload --port 8001")
        return

    if not state.get("available_dates"):
        print("No open dates. Add slots via /api/admin/availability first.")
        sys.exit(1)

    session_id = state["session_id"]
    day = state["available_dates"][0]
    times = client.get(f"/api/availability/{day}").json()["times"]

    show(
        "update",
        client.patch(
            f"/api/booking/{session_id}",
            json={
                "service_id": args.service,
                "quantity": args.quantity,
                "repaint": args.repaint,
                "delivery_method": args.delivery,
                "pickup_address": args.address,
                "booking_date": day,
                "booking_time": times[0] if times else None,
                "full_name": args.name,
                "email": args.email,
            },
        ),
    )

    for _ in range(4):
        resp = client.post(f"/api/booking/{session_id}/advance")
        show("advance", resp)
        if resp.status_code != 200:
            sys.exit(1)

    final = show("confirm", client.post(f"/api/booking/{session_id}/confirm"))
    if final.get("redirect_url"):
        print(f"  authenticate at: {final['redirect_url']}")
    print(f"order_id={final.get('order_id')}")


if __name__ == "__main__":
    main()
