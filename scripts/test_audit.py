#!/usr/bin/env python3
"""
Quick smoke test for the /api/audit endpoint.

Usage: python scripts/test_audit.py

Make sure the server is running (python run_server.py) before executing.
"""

import json
import os
import sys
import time

import requests

BASE_URL = os.getenv("BASE_URL", "http://localhost:8000")


def main():
    payload = {
        "brandName": "Mamaearth",
        "category": "beauty",
        "competitors": ["mCaffeine", "Minimalist"],
    }

    print(f"→ POST {BASE_URL}/api/audit")
    print(f"  Payload: {json.dumps(payload, indent=2)}")
    print()

    start = time.time()
    try:
        response = requests.post(f"{BASE_URL}/api/audit", json=payload, timeout=120)
    except requests.RequestException as e:
        print(f"✗ Request failed ({time.time() - start:.1f}s)")
        print(f"  {e}")
        print()
        print("Is the server running? (python run_server.py)")
        sys.exit(1)

    elapsed = time.time() - start

    if response.status_code != 200:
        print(f"✗ {response.status_code} ({elapsed:.1f}s)")
        print(f"  Error: {response.text}")
        sys.exit(1)

    data = response.json()

    print(f"✓ {response.status_code} OK ({elapsed:.1f}s)")
    print()
    print(f"auditId:          {data['auditId']}")
    print(f"status:           {data['status']}")
    print(f"visibilityScore:  {data['visibilityScore']}")
    print()

    breakdown = data.get("scoreBreakdown")
    if breakdown:
        print("Score Breakdown:")
        print(f"  Mention Frequency: {breakdown['mentionFrequency']}")
        print(f"  Sentiment Quality: {breakdown['sentimentQuality']}")
        print(f"  Platform Coverage: {breakdown['platformCoverage']}")
        print(f"  Position Strength: {breakdown['positionStrength']}")
        print()

    competitors = data.get("competitors", [])
    print(f"Competitors:      {len(competitors)}")
    for competitor in competitors:
        print(f"  - {competitor['name']}: {competitor['score']} ({competitor['mentionCount']} mentions)")
    print()

    print(f"Gaps:             {len(data.get('gaps', []))}")
    print(f"Recommendations:  {len(data.get('recommendations', []))}")
    print(f"Remaining today:  {response.headers.get('X-RateLimit-Remaining')}")


if __name__ == "__main__":
    main()
