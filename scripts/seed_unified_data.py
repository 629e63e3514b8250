import os
import sys
import argparse
import json

from dotenv import load_dotenv

# Repo root holds the modules as top-level files
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from firestore_client import FirestoreConfig, TradeStore, TradeStoreError
from sample_trades import SAMPLE_UNIFIED_TRADES


ENV_TEMPLATE = """# Firestore configuration
# Replace these values with your Firebase project settings
FIREBASE_API_KEY=your-firebase-api-key-here
FIREBASE_PROJECT_ID=your-firebase-project-id
FIREBASE_COLLECTION=unified_data
# Optional: request timeout in seconds
FIREBASE_TIMEOUT=15
# Optional: DEBUG, INFO, WARNING
LOG_LEVEL=INFO
"""


def write_env_template(env_path: str) -> bool:
    """Create a .env template; returns False if one already exists."""
    if os.path.exists(env_path):
        return False
    with open(env_path, "w", encoding="utf-8") as f:
        f.write(ENV_TEMPLATE)
    return True


def load_records(json_path: str | None) -> list[dict]:
    if not json_path:
        return [dict(r) for r in SAMPLE_UNIFIED_TRADES]
    with open(json_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError("JSON file must contain a list of trade documents")
    return [r for r in data if isinstance(r, dict)]


def main(argv: list[str]) -> int:
    parser = argparse.ArgumentParser(description="Seed the Firestore unified_data collection with trade documents.")
    parser.add_argument("--init-env", action="store_true", help="Write a .env template if none exists, then exit")
    parser.add_argument("--env-path", default=".env", help="Path of the .env file for --init-env")
    parser.add_argument("--json", help="Upload documents from this JSON list instead of the bundled samples")
    parser.add_argument("--dry-run", action="store_true", help="Print what would be uploaded without writing")
    args = parser.parse_args(argv)

    if args.init_env:
        if write_env_template(args.env_path):
            print(f"Created {args.env_path}. Fill in your Firebase project values.")
        else:
            print(f"{args.env_path} already exists; leaving it unchanged.")
        return 0

    try:
        records = load_records(args.json)
    except (OSError, ValueError) as e:
        print(f"ERROR: could not read documents: {e}", file=sys.stderr)
        return 1

    if args.dry_run:
        for rec in records:
            print(f" - {rec.get('TradeID', '?')}: {rec.get('TradeStatus', '')}")
        print(f"{len(records)} documents would be uploaded.")
        return 0

    load_dotenv()
    config = FirestoreConfig.from_env()
    if not config.is_configured:
        print("ERROR: FIREBASE_API_KEY and FIREBASE_PROJECT_ID must be set in environment/.env", file=sys.stderr)
        return 1

    store = TradeStore(config)
    uploaded = 0
    for rec in records:
        try:
            doc_id = store.add_trade_record(rec)
            uploaded += 1
            print(f"Added {rec.get('TradeID', '?')} as {doc_id}")
        except TradeStoreError as e:
            print(f"Warning: failed to add {rec.get('TradeID', '?')}: {e}")

    print(f"Uploaded {uploaded} of {len(records)} documents to {config.collection}.")
    return 0 if uploaded == len(records) else 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
