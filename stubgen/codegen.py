"""Render templates and write generated output.

Takes the context from context_builder and writes one Java source file
per API class and per model below <output_dir>/src/main/java.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import jinja2

from .config import GeneratorConfig
from .errors import TemplateRenderError

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"


def create_environment(template_dir: Path | None = None) -> jinja2.Environment:
    """Jinja2 environment over the template directory."""
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(template_dir or TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render(env: jinja2.Environment, template_name: str, context: dict[str, Any]) -> str:
    """Render one template with the given data context."""
    try:
        template = env.get_template(template_name)
        return template.render(**context)
    except jinja2.TemplateError as e:
        raise TemplateRenderError(template_name, e) from e


def write_to_file(path: Path, contents: str) -> Path:
    """Write contents to path, creating parent directories as needed."""
    logger.info("writing file %s", path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(contents, encoding="utf-8")
    return path


def package_dir(config: GeneratorConfig, package: str) -> Path:
    return config.output_dir / config.source_folder / package.replace(".", "/")


def generate(context: dict[str, Any], config: GeneratorConfig) -> list[Path]:
    """Render every API class and model and write them below config.output_dir."""
    env = create_environment(config.template_dir)
    api_dir = package_dir(config, config.api_package)
    model_dir = package_dir(config, config.model_package)
    written: list[Path] = []

    for api in context["apis"]:
        api_context = {**context, "api": api}
        if config.is_client:
            output = render(env, "client_interface.java.j2", api_context)
            written.append(write_to_file(api_dir / f"{api['classname']}.java", output))
            continue

        output = render(env, "interface.java.j2", api_context)
        written.append(write_to_file(api_dir / f"{api['classname']}.java", output))
        output = render(env, "adapter.java.j2", api_context)
        written.append(write_to_file(api_dir / f"{api['classname']}Adapter.java", output))

    if not config.is_client and config.is_jax_rs:
        output = render(env, "application.java.j2", context)
        filename = f"Abstract{context['short_app_name']}Application.java"
        written.append(write_to_file(api_dir / filename, output))

    for entry in context["models"]:
        model_context = {**context, **entry}
        output = render(env, "model.java.j2", model_context)
        written.append(write_to_file(model_dir / f"{entry['model'].class_filename}.java", output))

    logger.info(
        "Generated %d files (%d operations) in %s",
        len(written), context["operation_count"], config.output_dir,
    )
    return written
