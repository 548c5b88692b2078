#!/usr/bin/env python3

import os
import sys
import argparse
import logging.config

import uvicorn
import sqlalchemy.exc

from broping_core import settings as _settings
from broping_core.api.api import create_app
from broping_core.persistence import database


def get_parser(program: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=program)

    commands = parser.add_subparsers(
        description="Available sub-commands: init, run",
        dest="command",
        required=True,
        metavar="<command>",
        help="the sub-command to be executed"
    )

    parser_init = commands.add_parser(
        "init",
        description="Initialize the project by creating the config file and the database tables"
    )
    parser_run = commands.add_parser(
        "run",
        description="Run 'uvicorn' ASGI server to serve the broping core REST API"
    )

    parser_init.add_argument(
        "--database",
        type=str,
        metavar="url",
        help="Database connection URL including scheme and auth"
    )
    parser_init.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing config file"
    )

    parser_run.add_argument(
        "--host",
        type=str,
        metavar="host",
        help="Bind TCP socket to this host (overwrites config file)"
    )
    parser_run.add_argument(
        "--port",
        type=int,
        metavar="port",
        help="Bind TCP socket to this port (overwrites config file)"
    )
    parser_run.add_argument(
        "--config",
        type=str,
        metavar="path",
        default="config.json",
        help="Path to the config file (default: 'config.json')"
    )
    parser_run.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode with DEBUG log level for all loggers"
    )
    parser_run.add_argument(
        "--debug-sql",
        action="store_true",
        help="Print all SQL statements issued by the database engine"
    )
    parser_run.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload on source code changes"
    )
    parser_run.add_argument(
        "--workers",
        type=int,
        metavar="n",
        default=1,
        help="Number of worker processes (not valid with --reload)"
    )
    parser_run.add_argument(
        "--no-access-log",
        action="store_true",
        help="Disable the access log"
    )
    parser_run.add_argument(
        "--root-path",
        type=str,
        metavar="p",
        default="",
        help="Set the ASGI 'root_path' for applications submounted below a given URL path"
    )

    return parser


def run_server(args: argparse.Namespace) -> int:
    if args.debug:
        print("Do not start the server this way during production!", file=sys.stderr)
    if args.reload and args.workers != 1:
        print("The options --reload and --workers can't be combined.", file=sys.stderr)
        return 1

    _settings.CONFIG_PATHS.insert(0, args.config)
    try:
        settings = _settings.Settings()
    except ValueError:
        print("Ensure that the configuration file is valid. Please correct any errors.", file=sys.stderr)
        raise

    if args.debug:
        settings.logging.root["level"] = "DEBUG"
        for handler in settings.logging.handlers:
            settings.logging.handlers[handler]["level"] = "DEBUG"
    if args.debug_sql:
        settings.database.debug_sql = args.debug_sql

    port = args.port or settings.server.port
    host = args.host or settings.server.host

    app = create_app(settings=settings)

    logging.getLogger("broping_core").info(f"Server running at host {host} port {port}")
    uvicorn.run(
        "broping_core.api.api:api.app" if args.reload else app,
        port=port,
        host=host,
        reload=args.reload,
        workers=args.workers,
        log_level="debug" if args.debug else "info",
        log_config=settings.logging.model_dump(),
        access_log=not args.no_access_log,
        proxy_headers=True,
        root_path=args.root_path
    )
    return 0


def init_project(args: argparse.Namespace) -> int:
    path = os.path.abspath(_settings.CONFIG_PATHS[0])
    if os.path.exists(path) and not args.force:
        print(
            f"A config file has been found at {path!r} and will be used. If you want a "
            "fresh installation, remove the config file or use the '--force' option.",
            file=sys.stderr
        )
        config = _settings.Settings()
    else:
        config = _settings.store_configuration(
            _settings.get_default_core_config(_settings.get_db_from_env(args.database)),
            path
        )
        print(f"A new config file has been created as {path!r}.")

    logging.config.dictConfig(config.logging.model_dump())
    try:
        database.init(config.database.connection, config.database.debug_sql)
    except sqlalchemy.exc.SQLAlchemyError as exc:
        print(f"Failed to initialize the database: {exc}", file=sys.stderr)
        return 1

    print("Done.")
    return 0


if __name__ == '__main__':
    program_name = sys.argv[0] if not sys.argv[0].endswith("__main__.py") else "broping_core"
    namespace = get_parser(program_name).parse_args(sys.argv[1:])

    command_functions = {
        "run": run_server,
        "init": init_project
    }
    exit(command_functions[namespace.command](namespace))
