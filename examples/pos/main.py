"""
Entry point.

Run: python -m examples.pos.main            # in-memory store
     python -m examples.pos.main --remote   # REST backend from LONJA_API_BASE_URL
"""

import argparse

from lonja.config import get_settings
from lonja.logs import configure_logging
from lonja.remote import HttpStore, RemoteStore

from examples._infra import run
from examples.pos.cli import run_cli
from examples.pos.seed import seeded_store


def main() -> None:
    parser = argparse.ArgumentParser(description="Fish counter point of sale")
    parser.add_argument("--remote", action="store_true", help="use the REST backend instead of the demo store")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings)

    store: RemoteStore = HttpStore.from_settings(settings) if args.remote else seeded_store()
    run(lambda: run_cli(store, settings))


if __name__ == "__main__":
    main()
