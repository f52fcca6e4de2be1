# File Chain (see DEVELOPER.md):
# Doc Version: v1.0.0
#
"""
NetCompose Main Entry Point - CLI Argument Parsing and Local Rendering

PURPOSE:
    Runs the composer locally against requests read from files, the way a
    composition function is rendered before it is deployed. Each input file
    is either a full RunFunctionRequest document (YAML or JSON) or a bare
    composite resource manifest, which is used as the observed composite.

WHO I READ:
    - config.py: Configuration loading and defaults
    - compose.py: Composer
    - function.py: FunctionRequest / FunctionResponse
    - models.py: NetcomposeError exception handling
    - colorlog.py: Custom log formatting

DEPENDENCIES:
    - argparse: CLI argument parsing
    - yaml: reading requests, writing responses as a YAML document stream
    - enlighten: optional progress bar across request files

FLOW:
    1. Parse CLI arguments (create_argparser)
    2. Load configuration from config.toml (or defaults)
    3. Load and run every request, collecting the responses
    4. Write the responses to stdout or --output
    5. Return 0 if every response succeeded, 1 otherwise
"""

import argparse
import logging
import os
import sys
from pathlib import Path

import enlighten
import yaml

import netcompose
from netcompose.colorlog import CustomFormatter
from netcompose.compose import Composer
from netcompose.function import FunctionRequest, FunctionResponse
from netcompose.models import NetcomposeError

_LOGGER = logging.getLogger(__name__)


def create_argparser(parser_class=argparse.ArgumentParser):
    """create the argparser for netcompose"""
    parser = parser_class(
        prog=netcompose.__name__, description=netcompose.__description__
    )
    config_settings = parser.add_argument_group("configuration")

    config_settings.add_argument(
        "-c",
        "--config",
        dest="configfile",
        help="Use the configuration from this file, defaults to %(default)s",
        default="config.toml",
    )
    config_settings.add_argument(
        "-w",
        "--write",
        dest="writeconfig",
        action="store_true",
        help="Write the current configuration (defaults merged with --config) to a file and exit",
        default=False,
    )
    config_settings.add_argument(
        "-v", "--version", action="version", version=f"%(prog)s {netcompose.__version__}"
    )
    config_settings.add_argument(
        "-l",
        "--loglevel",
        type=str,
        default=os.environ.get("LOG_LEVEL", "WARN"),
        help="DEBUG, INFO, WARN, ERROR, CRITICAL, defaults to %(default)s",
    )
    config_settings.add_argument(
        "-p",
        "--progress",
        action="store_true",
        help="show a progress bar",
    )

    parser.add_argument(
        "-o",
        "--output",
        dest="output",
        metavar="FILE",
        type=str,
        default=None,
        help="Write the responses to FILE instead of stdout",
    )
    parser.add_argument(
        "--overwrite",
        dest="overwrite",
        action="store_true",
        default=False,
        help="Allow overwriting an existing --output file",
    )
    parser.add_argument(
        "--no-color",
        dest="color",
        action="store_false",
        default=True,
        help="Do not colorize log output",
    )
    parser.add_argument(
        "requests",
        nargs="*",
        metavar="REQUEST",
        help="Request or composite resource file (YAML or JSON), - reads stdin",
    )
    return parser


def get_log_level(level_name: str) -> tuple[int, bool]:
    log_levels = {
        "CRITICAL": logging.CRITICAL,
        "ERROR": logging.ERROR,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "INFO": logging.INFO,
        "DEBUG": logging.DEBUG,
        "NOTSET": logging.NOTSET,
    }
    level_name = level_name.upper()
    if level_name in log_levels:
        return log_levels[level_name], False
    else:
        return logging.WARNING, True


def setup_logging(loglevel: str, color: bool = True):
    """sets up the logging, takes the given loglevel and uses the custom,
    colorful log formatter
    """
    logging.basicConfig(level=logging.WARN)
    level, unknown_loglevel = get_log_level(loglevel)
    logging.root.setLevel(level)
    custom_formatter = CustomFormatter(color=color)
    for handler in logging.root.handlers:
        handler.setFormatter(custom_formatter)
    if unknown_loglevel:
        _LOGGER.warning("Unknown log level: %s", loglevel.upper())


def load_request(filename: str) -> FunctionRequest:
    """read a request from a YAML/JSON file, a document that looks like a
    composite resource is wrapped as the observed composite"""
    try:
        if filename == "-":
            document = yaml.safe_load(sys.stdin)
        else:
            with open(filename, encoding="utf-8") as handle:
                document = yaml.safe_load(handle)
    except (OSError, UnicodeDecodeError) as exc:
        raise NetcomposeError(f"cannot read {filename}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise NetcomposeError(f"cannot parse {filename}: {exc}") from exc

    if (
        isinstance(document, dict)
        and "observed" not in document
        and "apiVersion" in document
        and "kind" in document
    ):
        _LOGGER.info("Using %s as observed composite resource", filename)
        return FunctionRequest.from_composite(document)
    return FunctionRequest.from_dict(document)


def write_responses(responses: list[FunctionResponse], output: str | None, overwrite: bool):
    """write the responses as a YAML document stream"""
    text = yaml.safe_dump_all(
        [rsp.to_dict() for rsp in responses], sort_keys=False, explicit_start=True
    )
    if output is None:
        sys.stdout.write(text)
        return
    outfile = Path(output)
    if outfile.exists() and not overwrite:
        raise NetcomposeError(
            f"Refusing to overwrite existing file: {outfile}. Use --overwrite to replace it."
        )
    if outfile.exists():
        _LOGGER.warning("Overwriting existing output file %s", outfile)
    try:
        outfile.parent.mkdir(parents=True, exist_ok=True)
        outfile.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise NetcomposeError(f"cannot write {outfile}: {exc}") from exc
    _LOGGER.info("Responses written to %s", outfile)


def main(argv: list[str] | None = None):
    """main function, returns 0 on success, 1 otherwise"""
    parser = create_argparser()
    args = parser.parse_args(argv)
    setup_logging(args.loglevel, args.color)

    cfg = netcompose.Config.load(args.configfile)
    if args.writeconfig:
        cfg.save(args.configfile)
        return 0

    if not args.requests:
        parser.error("need at least one REQUEST file")

    composer = Composer(cfg)
    responses: list[FunctionResponse] = []
    manager = None
    ticks = None
    if args.progress:
        manager = enlighten.get_manager()
        ticks = manager.counter(
            total=len(args.requests),
            desc="requests",
            unit="requests",
            leave=False,
            color="cyan",
        )

    try:
        for filename in args.requests:
            responses.append(composer.run(load_request(filename)))
            if ticks is not None:
                ticks.update()
        write_responses(responses, args.output, args.overwrite)
    except NetcomposeError as exc:
        _LOGGER.error(exc)
        return 1
    finally:
        if manager is not None:
            ticks.close()  # type: ignore
            manager.stop()

    return 1 if any(rsp.is_fatal for rsp in responses) else 0


if __name__ == "__main__":
    sys.exit(main())
