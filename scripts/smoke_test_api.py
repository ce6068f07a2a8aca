#!/usr/bin/env python3
"""
Smoke test against a running SmartFit API

Signs up a throwaway user, logs in, fetches the profile and runs one fit
prediction. Exits non-zero on the first failure.
"""

import argparse
import sys
import uuid

from api_client import ApiError, SmartFitClient


def run_smoke_test(base_url: str) -> bool:
    client = SmartFitClient(base_url)
    suffix = uuid.uuid4().hex[:8]
    email = f"smoke_{suffix}@example.com"
    password = "smoke-test-password"

    print("\n" + "=" * 60)
    print(f"🧪 SmartFit smoke test: {base_url}")
    print("=" * 60 + "\n")

    try:
        health = client.health()
        print(f"✅ Health: {health['status']} (storage: {health['checks']['storage']['backend']})")

        client.signup(f"smoke_{suffix}", email, password, "Smoke Test")
        print(f"✅ Signup: {email}")

        client.token = None
        client.login(email, password)
        print("✅ Login")

        profile = client.me()
        assert profile["email"] == email, f"unexpected profile: {profile}"
        print(f"✅ Me: {profile['username']}")

        measurement = client.capture_measurements()
        product = client.create_product(
            "Smoke Test Shirt",
            size="L",
            measurements={"chest": measurement["chest"], "shoulders": measurement["shoulders"]}
        )
        result = client.predict_fit(product["id"])
        assert result["fitStatus"] == "perfect", f"unexpected fit: {result}"
        print(f"✅ Fit predict: {result['fitStatus']}")

    except (ApiError, AssertionError, KeyError) as e:
        print(f"❌ Smoke test failed: {e}")
        return False

    print("\n🎉 All smoke checks passed")
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Smoke test the SmartFit API")
    parser.add_argument("--url", default="http://localhost:8000", help="API base URL")
    args = parser.parse_args()

    sys.exit(0 if run_smoke_test(args.url) else 1)
