"""Entry point for taskboard CLI."""

import logging
import sys

NOUNS = {"task"}


def run_tui(argv: list[str]) -> int:
    """Launch the board TUI for the configured actor."""
    from textual.logging import TextualHandler

    from taskboard.cli import common_parser
    from taskboard.cli._common import actor_or_die, load_settings, open_client
    from taskboard.store import BoardStore
    from taskboard.ui import TaskboardApp

    args = common_parser().parse_args(argv)
    settings = load_settings(args)
    logging.basicConfig(level=settings.level, handlers=[TextualHandler()])

    actor = actor_or_die(settings, args.json)
    store = BoardStore(open_client(settings))
    TaskboardApp(store, actor).run()
    return 0


def main():
    # No noun = TUI mode, identity options allowed
    if not any(arg in NOUNS for arg in sys.argv[1:]) and not {"-h", "--help"} & set(sys.argv[1:]):
        sys.exit(run_tui(sys.argv[1:]))

    from taskboard.cli import build_parser
    from taskboard.cli._common import load_settings, setup_logging

    parser = build_parser()
    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    setup_logging(load_settings(args))
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
