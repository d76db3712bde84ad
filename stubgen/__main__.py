"""Entry point: python -m stubgen

Reads an OpenAPI document (spec/openapi.json by default) and writes Java
server stubs or a client proxy below the output directory.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .codegen import generate
from .config import CLIENT, SERVICE_NAME, SUPPORTED_LIBRARIES, GeneratorConfig, config_from_mapping, load_config
from .context_builder import build_context
from .errors import StubgenError
from .loader import load_spec

logger = logging.getLogger("stubgen")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="stubgen",
        description="Generate Java server stubs or client proxies from an OpenAPI document.",
    )
    parser.add_argument("spec", nargs="?", help="path or URL of the OpenAPI document")
    parser.add_argument("-c", "--config", help="JSON or YAML file with generator options")
    parser.add_argument("-o", "--output", help="output directory")
    parser.add_argument("--client", action="store_true", help="generate a client proxy instead of server stubs")
    parser.add_argument("--library", choices=sorted(SUPPORTED_LIBRARIES), help="server library")
    parser.add_argument("--service-name", help="override the application name")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output")
    return parser.parse_args(argv)


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    config = load_config(args.config) if args.config else GeneratorConfig()
    overrides = {}
    if args.output:
        overrides["output_dir"] = args.output
    if args.client:
        overrides["flavor"] = CLIENT
    if args.library:
        overrides["library"] = args.library
    if not overrides and not args.service_name:
        return config

    options = {
        "flavor": config.flavor,
        "library": config.library,
        "api_package": config.api_package,
        "model_package": config.model_package,
        "output_dir": config.output_dir,
        "template_dir": config.template_dir,
        "source_folder": config.source_folder,
        "date_library": config.date_library,
        "serializable_model": config.serializable_model,
        "import_mapping": config.import_mapping,
        "additional_properties": dict(config.additional_properties),
        **overrides,
    }
    if args.service_name:
        options["additional_properties"][SERVICE_NAME] = args.service_name
    return config_from_mapping(options)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _build_config(args)
        spec = load_spec(args.spec)
        context = build_context(spec, config)
        generate(context, config)
    except StubgenError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
