"""
Study: Quiz Roster Observation

Run: python -m quiz_proto.studies.quiz_roster.observe

Declare the kinds, build the roster, play a few rounds.
Then borrow `increment` for something that was never a user.
"""

import argparse
import logging
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, Optional

import numpy as np
import yaml

from quiz_proto.core.registry import BehaviorRegistry
from quiz_proto.core.resolution import invoke, invoke_with
from quiz_proto.users.behaviors import CATALOG
from quiz_proto.users.factory import FactoryConfig, PaidUserFactory, UserFactory

STUDY_DIR = Path(__file__).parent
DEFAULT_KINDS = STUDY_DIR / "kinds.yaml"
DEFAULT_ROSTER = STUDY_DIR / "roster.yaml"


def load_roster(path: Path) -> dict:
    """Load a roster document"""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def run_study(
    rounds: int = 3,
    roster_path: Optional[Path] = None,
    kinds_path: Optional[Path] = None,
) -> Dict[str, Any]:
    """
    Observe a roster of quiz users.

    Watch:
    - Base and paid users sharing one copy of each operation
    - Scores rising by exactly one per increment
    - Balances moving independently of scores
    - A plain object borrowing `increment`
    """
    roster_path = Path(roster_path or DEFAULT_ROSTER)
    kinds_path = Path(kinds_path or DEFAULT_KINDS)

    print("=" * 50)
    print("Study: Quiz Roster Observation")
    print("=" * 50)
    print("\nPrinciple: Store behavior once, link to it")
    print("-" * 50)

    registry = BehaviorRegistry()
    registry.load_yaml(kinds_path, CATALOG)
    for name in registry.names():
        print(f"Kind: {registry.get(name)}")

    roster = load_roster(roster_path)
    config = FactoryConfig.from_yaml(roster_path)
    users = UserFactory(config, behaviors=registry.get("user"))
    paid_users = PaidUserFactory(users, behaviors=registry.get("paid_user"))

    members = [users(u["name"], u["score"]) for u in roster.get("users", [])]
    paid = [
        paid_users(p["name"], p["score"], p["balance"])
        for p in roster.get("paid_users", [])
    ]
    everyone = members + paid

    print(f"\nRoster: {len(members)} users, {len(paid)} paid users")
    for user in everyone:
        print(f"  {invoke(user, 'say_name')}: {invoke(user, 'login')}")

    print(f"\nPlaying {rounds} rounds...")
    for _ in range(rounds):
        for user in everyone:
            invoke(user, "increment")
        for user in paid:
            invoke(user, "increase_balance")

    # Borrowing: the receiver was never linked to any kind
    borrowed = SimpleNamespace(score=10)
    invoke_with(registry.get("user"), "increment", borrowed)

    # Analysis
    print("\n" + "=" * 50)
    print("Observations")
    print("=" * 50)

    scores = np.array([u.score for u in everyone], dtype=np.float64)
    summary: Dict[str, Any] = {
        "mean_score": float(scores.mean()) if scores.size else 0.0,
        "min_score": float(scores.min()) if scores.size else 0.0,
        "max_score": float(scores.max()) if scores.size else 0.0,
        "total_balance": float(np.sum([p.accountBalance for p in paid])),
        "borrowed_score": borrowed.score,
    }

    for user in everyone:
        print(f"  {user}")
    print(f"\nScore range: [{summary['min_score']:.0f}, {summary['max_score']:.0f}]")
    print(f"Mean score: {summary['mean_score']:.2f}")
    print(f"Total paid balance: {summary['total_balance']:.0f}")
    print(f"Borrowed increment on a plain object: score={borrowed.score}")

    print("\n" + "=" * 50)
    print("Study complete. What did you observe?")
    print("=" * 50)

    return {
        "registry": registry,
        "users": members,
        "paid_users": paid,
        "borrowed": borrowed,
        "summary": summary,
    }


def main():
    parser = argparse.ArgumentParser(description="Quiz Roster Observation Study")
    parser.add_argument("--rounds", type=int, default=3, help="Rounds of play")
    parser.add_argument("--roster", type=Path, default=DEFAULT_ROSTER, help="Roster YAML")
    parser.add_argument("--kinds", type=Path, default=DEFAULT_KINDS, help="Kinds YAML")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    run_study(
        rounds=args.rounds,
        roster_path=args.roster,
        kinds_path=args.kinds,
    )


if __name__ == "__main__":
    main()
