"""Anonymize a captured event vote summary for use as a test fixture.

Reads a JSON vote summary as returned by the backend, replaces judge names
with fake ones (generated by faker with a fixed seed) and every id with a
stable fake UUID, and writes an anonymized copy.

Usage:
    python scripts/anonymize_vote_summary.py summary.json
    python scripts/anonymize_vote_summary.py summary.json -o output.json
"""

import argparse
import json
from pathlib import Path
from typing import Any

from faker import Faker

FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "fixtures"
DEFAULT_OUTPUT = FIXTURES_DIR / "vote_summary.json"

SEED = 20261019

ID_FIELDS = ("eventId", "passwordId", "judgeId", "id")


def discover(summary: dict[str, Any]) -> tuple[set[str], set[str]]:
    """Return (judge names, ids) found anywhere in the summary."""
    names: set[str] = set()
    ids: set[str] = set()

    if summary.get("eventId"):
        ids.add(str(summary["eventId"]))
    for entry in summary.get("passwordVotes", []):
        ids.add(str(entry["passwordId"]))
        for vote in entry.get("votes", []):
            for id_field in ID_FIELDS:
                if vote.get(id_field):
                    ids.add(str(vote[id_field]))
            if vote.get("judgeName"):
                names.add(vote["judgeName"])

    return names, ids


def generate_mapping(names: set[str], ids: set[str], seed: int) -> dict[str, str]:
    """Map each real name and id to a fake one.

    The same judge gets the same fake name everywhere. Generated names never
    collide with real ones.
    """
    fake = Faker(["pt_BR"])
    Faker.seed(seed)

    mapping: dict[str, str] = {}
    used: set[str] = set()
    for name in sorted(names):
        fake_name = fake.name()
        while fake_name in names or fake_name in used:
            fake_name = fake.name()
        used.add(fake_name)
        mapping[name] = fake_name

    for original_id in sorted(ids):
        mapping[original_id] = fake.uuid4()

    return mapping


def anonymize(summary: dict[str, Any], mapping: dict[str, str]) -> dict[str, Any]:
    """Return a copy of the summary with names and ids replaced."""
    def replace(value):
        return mapping.get(str(value), value) if value is not None else None

    result = dict(summary)
    result["eventId"] = replace(summary.get("eventId"))
    result["passwordVotes"] = []
    for entry in summary.get("passwordVotes", []):
        votes = []
        for vote in entry.get("votes", []):
            vote = dict(vote)
            for id_field in ID_FIELDS:
                if id_field in vote:
                    vote[id_field] = replace(vote[id_field])
            if "judgeName" in vote:
                vote["judgeName"] = replace(vote["judgeName"])
            votes.append(vote)
        result["passwordVotes"].append({
            **entry,
            "passwordId": replace(entry["passwordId"]),
            "votes": votes,
        })
    return result


def main():
    parser = argparse.ArgumentParser(
        description="Anonymize an event vote summary JSON")
    parser.add_argument("input", help="Path to the input JSON file")
    parser.add_argument("-o", "--output", default=str(DEFAULT_OUTPUT),
                        help=f"Output path (default: {DEFAULT_OUTPUT})")
    args = parser.parse_args()

    summary = json.loads(Path(args.input).read_text(encoding="utf-8"))

    names, ids = discover(summary)
    print(f"Found {len(names)} judge names and {len(ids)} ids")

    mapping = generate_mapping(names, ids, SEED)
    for original in sorted(names):
        print(f"  {original} -> {mapping[original]}")

    result = anonymize(summary, mapping)

    # Verify no original names remain
    text = json.dumps(result, ensure_ascii=False, indent=2)
    remaining = [name for name in names if name in text]
    if remaining:
        print(f"WARNING: {len(remaining)} names still found: {remaining}")
    else:
        print("All names successfully replaced.")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text + "\n", encoding="utf-8")
    print(f"Written to {output_path}")


if __name__ == "__main__":
    main()
