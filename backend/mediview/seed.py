# seed preview script: builds the mock roster and dumps it as json
# nothing is persisted by the api; this is for inspecting what a seed produces
# run: python -m mediview.seed --seed 42 --out mock.json

import argparse
import json
import logging
from pathlib import Path

from mediview.config import settings
from mediview.services.store import MockStore

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


def build_snapshot(store: MockStore) -> dict:
    """summaries plus a full profile for every patient on the roster"""
    summaries = store.list_patient_summaries()
    profiles = [store.require_profile(s.id) for s in summaries]
    return {
        "seed": store.seed,
        "patients": [s.model_dump(mode="json", by_alias=True) for s in summaries],
        "profiles": [p.model_dump(mode="json", by_alias=True) for p in profiles],
    }


def seed(seed_value=None, out=None) -> dict:
    store = MockStore(seed=seed_value)
    snapshot = build_snapshot(store)

    for patient in snapshot["patients"]:
        adherence = patient["medicationAdherence"]
        logger.info(
            f"{patient['id']}: {patient['name']}, mood {patient['lastMood']} "
            f"({patient['moodTrend']}), adherence {adherence if adherence is not None else 'N/A'}%"
        )

    if out:
        Path(out).write_text(json.dumps(snapshot, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info(f"Wrote {len(snapshot['profiles'])} profiles to {out}")

    return snapshot


def main(argv=None):
    parser = argparse.ArgumentParser(description="Preview the MediView mock patient data")
    parser.add_argument("--seed", type=int, default=settings.MOCK_SEED, help="random seed (default: MOCK_SEED)")
    parser.add_argument("--out", default=None, help="write the generated data to this json file")
    args = parser.parse_args(argv)
    seed(args.seed, args.out)


if __name__ == "__main__":
    main()
