#!/usr/bin/env python3
"""
PayHere checkout and notification flow script.

DO NOT ADD BUSINESS LOGIC HERE.
This script only orchestrates API calls and signs the notification the
way PayHere would, using the merchant credentials from the environment.

Usage:
    python scripts/simulate_notification.py --amount 1500
    python scripts/simulate_notification.py --amount 99.9 --status-code -2
    python scripts/simulate_notification.py --amount 10 --tamper

Flow:
    1. Request a signed checkout hash
    2. Post a PayHere-style notification for the order
    3. Poll the payment status
"""

import argparse
import json
import sys
from pathlib import Path

import httpx

sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import settings  # noqa: E402
from app.gateways.payhere import PayHereGateway  # noqa: E402

BASE_URL = f"http://localhost:{settings.port}"


def print_step(step: int, title: str):
    """Print step header."""
    print(f"\n{'='*60}")
    print(f"STEP {step}: {title}")
    print("="*60)


def show(response: httpx.Response) -> dict:
    """Print and return a JSON response."""
    data = response.json() if response.text else {}
    print(f"HTTP {response.status_code}")
    print(json.dumps(data, indent=2))
    return data


def main():
    parser = argparse.ArgumentParser(description="Simulate a PayHere payment against a running server")
    parser.add_argument("--amount", required=True, help="Checkout amount, e.g. 1500.00")
    parser.add_argument("--status-code", default="2", help="PayHere status code to report (default: 2)")
    parser.add_argument("--customer-id", default="customer-1", help="Value for custom_1")
    parser.add_argument("--tamper", action="store_true", help="Send an invalid md5sig")
    parser.add_argument("--base-url", default=BASE_URL)
    args = parser.parse_args()

    gateway = PayHereGateway(
        merchant_id=settings.merchant_id,
        merchant_secret=settings.merchant_secret,
    )

    print_step(1, "Request checkout hash")
    response = httpx.get(
        f"{args.base_url}/api/payment/hash",
        params={"amount": args.amount},
        timeout=10.0,
    )
    checkout = show(response)
    if response.status_code != 200:
        print("ERROR: Could not create checkout")
        sys.exit(1)

    order_id = checkout["orderId"]

    print_step(2, "Post PayHere notification")
    fields = {
        "merchant_id": checkout["merchantId"],
        "order_id": order_id,
        "payment_id": "320025071278",
        "payhere_amount": checkout["amount"],
        "payhere_currency": checkout["currency"],
        "status_code": args.status_code,
        "custom_1": args.customer_id,
        "method": "VISA",
        "status_message": "Successfully completed the payment.",
        "card_holder_name": "Test Customer",
        "card_no": "************1292",
        "card_expiry": "12/30",
    }
    fields["md5sig"] = gateway.notification_signature(
        fields["merchant_id"],
        fields["order_id"],
        fields["payhere_amount"],
        fields["payhere_currency"],
        fields["status_code"],
    )
    if args.tamper:
        fields["md5sig"] = "0" * 32

    # PayHere posts application/x-www-form-urlencoded
    show(httpx.post(f"{args.base_url}/api/payment/notify", data=fields, timeout=10.0))

    print_step(3, "Check payment status")
    status = show(httpx.get(f"{args.base_url}/api/payment/status/{order_id}", timeout=10.0))

    print(f"\nOrder {order_id}: success={status.get('success')} status={status.get('status')}")


if __name__ == "__main__":
    main()
