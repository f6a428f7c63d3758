"""
Calibration report: simulate respondents against the default question bank.

Usage:
    python scripts/run_simulation.py --users 1000 --threshold 0.9 --max-questions 8
    python scripts/run_simulation.py --context work --traits Strategic Achiever
"""

import argparse
import logging

from typecoach.content.strengths import is_known_theme
from typecoach.core.simulator import SimConfig, run_simulation


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Simulate the type question loop")
    parser.add_argument("--users", type=int, default=1000)
    parser.add_argument("--threshold", type=float, default=0.9)
    parser.add_argument("--max-questions", type=int, default=8)
    parser.add_argument("--min-questions", type=int, default=0)
    parser.add_argument("--noise", type=float, default=0.05)
    parser.add_argument("--context", choices=["work", "relationships", "private"], default=None)
    parser.add_argument("--traits", nargs="*", default=None, metavar="THEME",
                        help="Top strength themes of the simulated users, e.g. Strategic Learner")
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args(argv)

    unknown = [t for t in args.traits or [] if not is_known_theme(t)]
    if unknown:
        parser.error(f"unknown strength themes: {', '.join(unknown)}")
    return args


def build_config(args) -> SimConfig:
    return SimConfig(
        n_users=args.users,
        threshold=args.threshold,
        max_questions=args.max_questions,
        min_questions=args.min_questions,
        noise=args.noise,
        context=args.context,
        traits=args.traits,
        seed=args.seed,
    )


def main():
    args = parse_args()

    logging.basicConfig(level=logging.INFO, format="%(name)s - %(levelname)s - %(message)s")
    logging.getLogger("typecoach").setLevel(logging.INFO)

    stats = run_simulation(build_config(args))

    print("=" * 60)
    print("  Question loop calibration")
    print("=" * 60)
    print(f"  avg questions     {stats.avg_questions:.2f}")
    print(f"  avg confidence    {stats.avg_confidence:.3f}")
    print(f"  stop by threshold {stats.stop_by_threshold:.2f}")
    print(f"  stop by max       {stats.stop_by_max:.2f}")
    print(f"  type hit rate     {stats.type_hit_rate:.2f}")
    print()
    print("Top information-gain questions:")
    for row in stats.ig_per_question[:8]:
        print(f"  {row['id']:>4}  {row['avg_ig']:.3f}  {row['text']}")


if __name__ == "__main__":
    main()
