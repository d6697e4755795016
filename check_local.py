"""
Local Check Script for the Wise Transfer Pipeline

This script exercises the pieces against the Wise sandbox one at a
time, before running main.py.

Usage:
    python check_local.py          # read-only checks plus a quote
    python check_local.py --full   # also creates a sandbox transfer

Before running:
    - Set WISE_API_TOKEN or create a .env file
    - Use a sandbox token; WISE_API_URL defaults to the sandbox
"""

import json
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from config.settings import Settings


def check_request_bodies():
    """Print the request bodies the pipeline sends (no network)."""
    print("\n" + "=" * 50)
    print("CHECK: Request Bodies")
    print("=" * 50)

    from config.transfer import (
        build_quote_request,
        build_recipient_request,
        build_transfer_request,
    )

    bodies = {
        "quote": build_quote_request(),
        "recipient": build_recipient_request(),
        "transfer": build_transfer_request("<quote-id>", "<recipient-id>", "<token>"),
    }

    for name, body in bodies.items():
        print(f"\n{name}:")
        print(json.dumps(body, indent=2))

    print("\n[PASS] Request bodies built")
    return True


def check_profiles(settings: Settings):
    """List profiles and look for the personal one."""
    print("\n" + "=" * 50)
    print("CHECK: Profiles")
    print("=" * 50)

    if not settings.has_token:
        print("\n[SKIP] WISE_API_TOKEN not set")
        return None

    from src.wise_client import WiseClient, WiseAPIError
    from src.pipeline import select_personal_profile

    try:
        profiles = WiseClient(settings).list_profiles()
        for profile in profiles:
            print(f"  {profile.id}: {profile.type}")

        personal = select_personal_profile(profiles)
        print(f"\nPersonal profile: {personal.id}")
        print("\n[PASS] Profiles fetched")
        return True
    except (WiseAPIError, ValueError) as e:
        print(f"\n[FAIL] {e}")
        return False


def check_quote(settings: Settings):
    """Create a quote under the personal profile and show its options."""
    print("\n" + "=" * 50)
    print("CHECK: Quote")
    print("=" * 50)

    if not settings.has_token:
        print("\n[SKIP] WISE_API_TOKEN not set")
        return None

    from config.transfer import PAYMENT_METHOD
    from src.wise_client import WiseClient, WiseAPIError
    from src.pipeline import select_personal_profile, describe_payment_option

    try:
        client = WiseClient(settings)
        profile = select_personal_profile(client.list_profiles())
        quote = client.create_quote(profile.id)

        print(f"\nQuote ID: {quote.id}")
        print(f"Payment options: {len(quote.payment_options)}")
        for option in quote.payment_options:
            print(f"  {option.pay_in} -> {option.pay_out}")

        option = quote.find_payment_option(PAYMENT_METHOD)
        if option is None:
            print(f"\nNo {PAYMENT_METHOD} option in quote")
        else:
            lines, warnings = describe_payment_option(quote, option)
            for line in lines + warnings:
                print(f"  {line}")

        print("\n[PASS] Quote created")
        return True
    except (WiseAPIError, ValueError) as e:
        print(f"\n[FAIL] {e}")
        return False


def check_full_pipeline(settings: Settings):
    """Run the whole pipeline in the sandbox (creates a transfer)."""
    print("\n" + "=" * 50)
    print("CHECK: Full Pipeline")
    print("=" * 50)

    if "--full" not in sys.argv:
        print("\n[SKIP] Pass --full to create a sandbox transfer")
        return None

    if not settings.has_token:
        print("\n[SKIP] WISE_API_TOKEN not set")
        return None

    from src.wise_client import WiseClient
    from src.pipeline import TransferPipeline

    result = TransferPipeline(WiseClient(settings)).run()
    for line in result.display_lines:
        print(f"  {line}")

    if result.success:
        print("\n[PASS] Transfer created")
        return True

    print(f"\n[FAIL] {result.failed_step} ({result.failure}): {result.error}")
    return False


def main():
    """Run all checks."""
    print("=" * 50)
    print("Wise Transfer - Local Checks")
    print("=" * 50)

    load_dotenv()
    settings = Settings.from_env()
    print(f"API: {settings.base_url}")

    results = {
        "Request Bodies": check_request_bodies(),
        "Profiles": check_profiles(settings),
        "Quote": check_quote(settings),
        "Full Pipeline": check_full_pipeline(settings),
    }

    # Print summary
    print("\n" + "=" * 50)
    print("CHECK SUMMARY")
    print("=" * 50)

    for check_name, result in results.items():
        if result is True:
            status = "[PASS]"
        elif result is False:
            status = "[FAIL]"
        else:
            status = "[SKIP]"
        print(f"  {status} {check_name}")

    print("=" * 50)

    if any(r is False for r in results.values()):
        sys.exit(1)


if __name__ == "__main__":
    main()
