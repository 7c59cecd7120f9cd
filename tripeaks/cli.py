"""
TriPeaks CLI - Command-line interface for the engine.

Usage:
    tripeaks deal [--seed N]                 Deal and print a game
    tripeaks progress [--data-dir D]         Show saved player progress
    tripeaks craft RARITY [--data-dir D]     Craft an artifact
    tripeaks serve [--host H] [--port P]     Run the HTTP API
"""

import argparse
import logging
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="TriPeaks - Solitaire engine with artifact progression",
        prog="tripeaks",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Deal command
    deal_parser = subparsers.add_parser("deal", help="Deal and print a game")
    deal_parser.add_argument("--seed", type=int, help="Seed for a reproducible deal")

    # Progress command
    progress_parser = subparsers.add_parser("progress", help="Show player progress")
    progress_parser.add_argument("--data-dir", help="Progress directory (default ~/.tripeaks)")

    # Craft command
    craft_parser = subparsers.add_parser("craft", help="Craft an artifact from fragments")
    craft_parser.add_argument(
        "rarity",
        choices=["common", "rare", "epic", "legendary"],
        help="Rarity of the artifact to craft",
    )
    craft_parser.add_argument("--data-dir", help="Progress directory (default ~/.tripeaks)")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "deal":
        cmd_deal(args)
    elif args.command == "progress":
        cmd_progress(args)
    elif args.command == "craft":
        cmd_craft(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def format_tableau(state) -> list[str]:
    """One line per tableau row; face-down cards print as '##'."""
    lines = []
    for row in state.tableau:
        labels = [card.label if card.face_up else "##" for card in row]
        lines.append(" ".join(f"{label:>3}" for label in labels))
    return lines


def cmd_deal(args):
    """Deal a game and print it."""
    import random
    from .engine_core import legal_actions, new_game

    state = new_game(random.Random(args.seed))

    print("Tableau:")
    for line in format_tableau(state):
        print(f"  {line}")
    print(f"Waste: {state.waste_top.label}")
    print(f"Stock: {len(state.stock)} cards")

    plays = [a.payload.card_id for a in legal_actions(state) if a.payload.card_id]
    print(f"Playable: {', '.join(plays) if plays else 'none'}")


def cmd_progress(args):
    """Show saved player progress."""
    from .progression import get_artifact_progress
    from .storage import ProgressStore

    progress = ProgressStore(args.data_dir).load()

    print(f"Games played: {progress.games_played}")
    print(f"Games won: {progress.games_won}")
    print(f"Total score: {progress.total_score}")
    print(f"Streak: {progress.current_streak} (best {progress.best_streak})")

    print("\nFragments:")
    for rarity, counts in get_artifact_progress(progress.fragments).items():
        marker = " - ready to craft" if counts.ready else ""
        print(f"  {rarity.value}: {counts.current}/{counts.required}{marker}")

    if progress.artifacts:
        print("\nArtifacts:")
        for artifact in progress.artifacts:
            print(f"  {artifact.icon} {artifact.name} ({artifact.rarity.value})")


def cmd_craft(args):
    """Craft an artifact and save."""
    from .progression import Rarity, craft_artifact
    from .storage import ProgressStore

    store = ProgressStore(args.data_dir)
    try:
        progress, artifact = craft_artifact(store.load(), Rarity(args.rarity))
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if not store.save(progress):
        print(f"Error: could not save progress to {store.path}")
        sys.exit(1)

    print(f"Crafted {artifact.icon} {artifact.name}")
    print(f"  {artifact.description}")


def cmd_serve(args):
    """Run the HTTP API with uvicorn."""
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed. Install with: pip install uvicorn")
        sys.exit(1)

    uvicorn.run("tripeaks.api.app:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
