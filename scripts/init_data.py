import sys
from pathlib import Path

from dotenv import load_dotenv

# Ensure repo root is on sys.path when running as a script (Windows-friendly).
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.intake.config import load_config
from app.intake.storage import SubmissionStore, store_from_config


def init_data(config: dict | None = None) -> SubmissionStore:
    """
    Create the submissions file with its header row if it does not exist yet.
    Safe to run repeatedly; an existing file is never touched.
    """
    load_dotenv()
    store = store_from_config(config or load_config())
    store.ensure_initialized()
    return store


def main() -> None:
    store = init_data()
    print(f"Submissions file ready: {store.path}")


if __name__ == "__main__":
    main()
