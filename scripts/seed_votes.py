"""Fill a CSV store with a fake roster and random ballots.

Generates participant names and topics using faker with a fixed seed, writes
them as the roster, then submits random ballots through the normal
validation path. Handy for trying the voting page against realistic data.

Usage:
    python scripts/seed_votes.py data
    python scripts/seed_votes.py data --nominees 12 --ballots 40 --seed 7
"""

import argparse
import random
import sys
from pathlib import Path

from faker import Faker

sys.path.insert(0, str(Path(__file__).parent.parent))

from classvote.log import setup_logging
from classvote.models import CATEGORIES, RANKS, STANCE_BOTH, STANCE_CONTRA, STANCE_FAVOR, Nominee
from classvote.storage import open_store
from classvote.votes import get_summary, submit_ballot

SEED = 20251019

STANCES = [STANCE_FAVOR, STANCE_CONTRA, STANCE_BOTH]


def fake_roster(fake: Faker, rng: random.Random, count: int) -> list[Nominee]:
    """Generate a roster with unique names.

    Stances cycle so that both categories always have at least three
    eligible nominees when count >= 6.
    """
    names: list[str] = []
    while len(names) < count:
        name = fake.first_name()
        if name not in names:
            names.append(name)

    return [
        Nominee(
            name=name,
            topic=fake.catch_phrase(),
            stance=STANCES[i % len(STANCES)],
            notes=fake.sentence(nb_words=6) if rng.random() < 0.3 else "",
        )
        for i, name in enumerate(names)
    ]


def random_payload(
    fake: Faker, rng: random.Random, roster: list[Nominee]
) -> dict:
    """Build a ballot payload picking distinct eligible nominees per category."""
    payload = {"voterName": fake.name()}
    for category in CATEGORIES:
        options = [n.name for n in roster if n.eligible_for(category)]
        chosen = rng.sample(options, k=min(len(RANKS), len(options)))
        chosen += [""] * (len(RANKS) - len(chosen))
        payload[category] = dict(zip(RANKS, chosen))
    return payload


def main():
    parser = argparse.ArgumentParser(description="Seed a vote store with fake data")
    parser.add_argument("location", help="Store location (a directory, or 'memory')")
    parser.add_argument("--nominees", type=int, default=9, help="Roster size")
    parser.add_argument("--ballots", type=int, default=25, help="Number of ballots")
    parser.add_argument("--seed", type=int, default=SEED, help="Random seed")
    parser.add_argument("--locale", default="es_ES", help="Faker locale")
    args = parser.parse_args()

    setup_logging()

    fake = Faker(args.locale)
    fake.seed_instance(args.seed)
    rng = random.Random(args.seed)

    store = open_store(args.location)
    roster = fake_roster(fake, rng, args.nominees)
    store.write_roster(roster)
    print(f"Wrote roster of {len(roster)} nominees")

    written = 0
    for _ in range(args.ballots):
        written += submit_ballot(store, random_payload(fake, rng, roster))
    print(f"Submitted {args.ballots} ballots ({written} votes)")

    summary = get_summary(store)
    for category in CATEGORIES:
        print(f"\n{category}:")
        for entry in summary.get_category(category).table:
            print(
                f"  {entry.name:<20} {entry.points:6.2f}"
                f"  {entry.first:>3} {entry.second:>3} {entry.third:>3}"
            )


if __name__ == "__main__":
    main()
