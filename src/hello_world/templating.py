# src/hello_world/templating.py

"""
Builds the cold-start log message.

`context_from_file` turns the YAML parameter file into a template context and
`generate_log` renders a Jinja2 template with that context plus a freshly
shuffled `Items` sequence. Pass an explicit `random.Random` to `generate_log`
to get reproducible output.
"""

import logging
import random
import time
from pathlib import Path
from typing import Any, Mapping

import pydantic
import yaml
from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
    TemplateSyntaxError,
)

from .config import PACKAGED_TEMPLATE_DIR
from .exceptions import ConfigParseError, TemplateLoadError, TemplateRenderError
from .schemas import ConfigRecord

logger = logging.getLogger(__name__)

DEFAULT_ITEM_COUNT = 9000


def context_from_file(path: str | Path) -> dict[str, Any]:
    """
    Reads a YAML parameter file and returns it as a template context.

    Raises ConfigParseError if the file is missing, unreadable, not valid
    YAML, or not a mapping of string-like values.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigParseError(
            str(path), "file not found", error_code="CONFIG_FILE_NOT_FOUND"
        ) from e
    except OSError as e:
        raise ConfigParseError(
            str(path), str(e), error_code="CONFIG_FILE_UNREADABLE"
        ) from e

    try:
        # BaseLoader keeps every scalar as its literal text (`1.10`, `010`, `on`).
        data = yaml.load(raw, Loader=yaml.BaseLoader)
    except yaml.YAMLError as e:
        raise ConfigParseError(str(path), f"invalid YAML: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigParseError(
            str(path), f"expected a mapping, got {type(data).__name__}"
        )

    try:
        record = ConfigRecord.model_validate(data)
    except pydantic.ValidationError as e:
        raise ConfigParseError(
            str(path),
            "invalid parameter values",
            context={"validation_errors": e.errors(include_url=False)},
        ) from e

    logger.debug(
        "Loaded template parameters",
        extra={"path": str(path), "app_name": record.AppName, "env": record.Env},
    )
    return record.to_template_context()


def _build_environment(template_dir: str | Path) -> Environment:
    # Log messages are plain text, so no HTML autoescaping.
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        undefined=StrictUndefined,
        autoescape=False,
        keep_trailing_newline=False,
    )


def generate_log(
    template_name: str,
    context: Mapping[str, Any],
    rng: random.Random | None = None,
    template_dir: str | Path = PACKAGED_TEMPLATE_DIR,
    item_count: int = DEFAULT_ITEM_COUNT,
) -> str:
    """
    Renders `template_name` with `context` plus an `Items` permutation of
    range(item_count). The caller's mapping is not modified.
    """
    if rng is None:
        rng = random.Random(time.time_ns())

    env = _build_environment(template_dir)
    try:
        template = env.get_template(template_name)
    except TemplateNotFound as e:
        raise TemplateLoadError(
            template_name,
            f"not found in {template_dir}",
            error_code="TEMPLATE_NOT_FOUND",
        ) from e
    except TemplateSyntaxError as e:
        raise TemplateLoadError(
            template_name,
            f"line {e.lineno}: {e.message}",
            error_code="TEMPLATE_SYNTAX_ERROR",
        ) from e

    render_context = dict(context)
    render_context["Items"] = rng.sample(range(item_count), item_count)

    try:
        return template.render(render_context)
    except TemplateError as e:
        raise TemplateRenderError(template_name, str(e)) from e
    except (TypeError, ValueError, LookupError, ArithmeticError) as e:
        # Expressions in the template itself can fail, e.g. Items[20000].
        raise TemplateRenderError(template_name, f"{type(e).__name__}: {e}") from e
