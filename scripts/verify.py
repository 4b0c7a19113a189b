"""
CSV Export Verification Script

Checks a downloaded day export (orders-YYYY-MM-DD.csv) for integrity.
Run from project root: python scripts/verify.py orders-2026-10-18.csv
"""

import argparse
import os
import re
import sys
from datetime import datetime

import pandas as pd

REQUIRED_COLUMNS = [
    "order_no",
    "created_at",
    "guest_name",
    "room_no",
    "total",
    "status",
    "payment_status",
    "items",
]

ORDER_NO_PATTERN = re.compile(r"^ORD-\d{6}-\d{5}$")
ITEM_PATTERN = re.compile(r"^(\d+)x (.+)$")


def verify_export(path: str) -> bool:
    """Verify an exported CSV file."""

    print("=" * 60)
    print("CSV EXPORT VERIFICATION REPORT")
    print("=" * 60)
    print(f"Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"File: {path}")
    print("=" * 60)

    if not os.path.exists(path):
        print("\nExport file not found!")
        return False

    try:
        df = pd.read_csv(path, dtype={"room_no": str, "items": str}, keep_default_na=False)
    except (OSError, pd.errors.ParserError) as e:
        print(f"\nCould not read export: {e}")
        return False

    ok = True

    print("\nSTATISTICS:")
    print(f"   Total Orders: {len(df)}")

    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        print(f"\nMissing Columns: {missing}")
        return False
    print("All required columns present")

    duplicates = df["order_no"].duplicated().sum()
    if duplicates > 0:
        print(f"{duplicates} duplicate order numbers found!")
        ok = False
    else:
        print("No duplicate order numbers")

    bad_numbers = df[~df["order_no"].astype(str).str.match(ORDER_NO_PATTERN)]
    if len(bad_numbers):
        print(f"{len(bad_numbers)} malformed order numbers")
        ok = False

    # Line summaries carry quantities but not prices, so only check shape.
    for _, row in df.iterrows():
        for part in filter(None, row["items"].split("|")):
            if not ITEM_PATTERN.match(part):
                print(f"Malformed item summary on {row['order_no']}: {part!r}")
                ok = False

    if len(df):
        print("\nREVENUE:")
        print(f"   Total: {df['total'].sum()}")
        print(f"   Average: {df['total'].mean():.2f}")
        print("\nBY STATUS:")
        print(df.groupby("status")["total"].agg(["count", "sum"]).to_string())

    print("\n" + "=" * 60)
    print("VERIFICATION COMPLETE" if ok else "VERIFICATION FAILED")
    print("=" * 60)

    return ok


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Verify a daily CSV export")
    parser.add_argument("path", help="Path to orders-YYYY-MM-DD.csv")
    args = parser.parse_args()
    sys.exit(0 if verify_export(args.path) else 1)
