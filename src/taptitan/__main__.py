"""Entry point for `python -m taptitan` or the `taptitan` console script."""

import argparse
import logging
import random
import sys

from taptitan.config import Rules


def _run_headless(args: argparse.Namespace, rules: Rules) -> int:
    from taptitan.clock import ManualClock
    from taptitan.harness import AutoPlayer, run_headless
    from taptitan.models import SessionPhase
    from taptitan.session import SessionController

    clock = ManualClock()
    controller = SessionController(clock=clock, rules=rules, rng=random.Random(args.seed))
    player = AutoPlayer(
        accuracy=args.accuracy,
        jitter_ms=args.jitter,
        rng=random.Random(None if args.seed is None else args.seed + 1),
    )
    session = run_headless(controller, clock, player, max_ms=args.max_seconds * 1000.0)

    stats = session.stats
    outcome = "titan defeated" if session.phase is SessionPhase.ENDED else "time limit reached"
    print(f"{outcome} after {session.game_time / 1000.0:.1f}s")
    print(f"score {stats.score}  max combo {stats.max_combo}  titan HP {stats.titan_hp}")
    print(f"perfect {stats.perfect}  good {stats.good}  miss {stats.missed}")
    print(f"final level {controller.difficulty.level}")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="TapTitan: adaptive rhythm battle")
    parser.add_argument("--seed", type=int, default=None, help="Seed for note generation")
    parser.add_argument("--strict-taps", action="store_true", help="Taps on empty space break the combo")
    parser.add_argument("--headless", action="store_true", help="Run a scripted auto-player without a window")
    parser.add_argument("--accuracy", type=float, default=0.9, help="Auto-player tap probability (headless)")
    parser.add_argument("--jitter", type=float, default=30.0, help="Auto-player timing spread in ms (headless)")
    parser.add_argument("--max-seconds", type=float, default=600.0, help="Game-time limit (headless)")
    parser.add_argument("--log-level", default="WARNING", help="Logging level, e.g. INFO or DEBUG")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    rules = Rules(empty_tap_breaks_combo=args.strict_taps)

    if args.headless:
        sys.exit(_run_headless(args, rules))

    import pygame

    from taptitan.app import App

    try:
        app = App(rules=rules, seed=args.seed)
    except pygame.error as exc:
        logging.getLogger("taptitan").error("Could not open a window: %s", exc)
        sys.exit(1)
    app.run()


if __name__ == "__main__":
    main()
