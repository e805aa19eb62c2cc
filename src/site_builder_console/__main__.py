"""CLI entry point: python -m site_builder_console <command>."""

from __future__ import annotations

import argparse
import logging
import sys

from site_builder_console.commands import COMMANDS, CommandContext, get_command
from site_builder_console.errors import SiteBuilderError, log_and_return_command_error
from site_builder_console.translation import Translator


def build_parser(translator: Translator) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="site-builder",
        description=translator.trans("application.description"),
    )
    parser.add_argument(
        "--site-dir",
        default=None,
        help=translator.trans("application.options.site-dir"),
    )
    parser.add_argument(
        "-n",
        "--no-interaction",
        action="store_true",
        default=False,
        help=translator.trans("application.options.no-interaction"),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help=translator.trans("application.options.verbose"),
    )
    sub = parser.add_subparsers(dest="command")

    for command in COMMANDS:
        key = command.translation_key
        command_parser = sub.add_parser(
            command.name,
            aliases=list(command.aliases),
            help=translator.trans(f"{key}.description"),
            description=translator.trans(f"{key}.help"),
        )
        command.configure(command_parser, translator)

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _build_context(args: argparse.Namespace, translator: Translator) -> CommandContext:
    from site_builder_console.catalog.loader import load_catalog
    from site_builder_console.config import load_site_config
    from site_builder_console.interaction.io import ConsoleIO
    from site_builder_console.storage.store import ConfigStore
    from site_builder_console.telemetry import LoggerTelemetrySink

    site = load_site_config(args.site_dir)
    catalog = load_catalog(site.catalog_file)
    return CommandContext(
        io=ConsoleIO(interactive=not args.no_interaction),
        catalog=catalog,
        store=ConfigStore(site.config_dir, catalog, LoggerTelemetrySink()),
        site=site,
        translator=translator,
    )


def main(argv: list[str] | None = None) -> None:
    translator = Translator()
    parser = build_parser(translator)
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    _configure_logging(args.verbose)
    command_class = get_command(args.command)

    try:
        context = _build_context(args, translator)
        command_class(context).run(args)
    except SiteBuilderError as exc:
        message = log_and_return_command_error(
            command_name=command_class.name, exc=exc, user_message=str(exc)
        )
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(1)
    except (EOFError, KeyboardInterrupt):
        print(file=sys.stderr)
        print(translator.trans("application.messages.aborted"), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
