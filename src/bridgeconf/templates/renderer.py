"""Configuration document renderer.

Renders a ``BridgeConfig`` into the annotated TOML configuration file using
the packaged Jinja2 skeleton. Output is deterministic: mappings are always
emitted in key order, so the same model always produces the same bytes.
"""

import io
import logging
import os
import stat
import tempfile
from collections.abc import Iterator
from dataclasses import fields
from functools import lru_cache
from pathlib import Path
from typing import Any, TextIO

from jinja2 import Environment, PackageLoader, StrictUndefined, Template, UndefinedError

from bridgeconf.errors import MalformedModelError, SinkWriteError
from bridgeconf.models import BridgeConfig
from bridgeconf.renderers.filters import format_value

logger = logging.getLogger(__name__)

CONFIG_TEMPLATE = "configfile.toml.j2"


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    """Return the process-wide Jinja2 environment.

    Built on first use and never torn down. Whitespace control stays off,
    the skeleton's line layout is part of the output contract.
    """
    env = Environment(
        loader=PackageLoader("bridgeconf", "templates"),
        autoescape=False,
        undefined=StrictUndefined,
        finalize=format_value,
        keep_trailing_newline=True,
    )

    return env


@lru_cache(maxsize=None)
def get_template(template_name: str = CONFIG_TEMPLATE) -> Template:
    """Return a compiled, cached skeleton."""
    return get_environment().get_template(template_name)


def build_context(config: BridgeConfig) -> dict[str, Any]:
    """Expose each top-level section as a root template variable.

    Args:
        config: Bridge configuration

    Returns:
        Template context (section name -> section)
    """
    return {f.name: getattr(config, f.name) for f in fields(config)}


def _generate(template: Template, context: dict[str, Any]) -> Iterator[str]:
    try:
        yield from template.generate(**context)
    except UndefinedError as e:
        raise MalformedModelError(f"Configuration model is missing a value: {e}") from e
    except (TypeError, AttributeError) as e:
        raise MalformedModelError(f"Configuration model has an invalid shape: {e}") from e


def render(
    config: BridgeConfig,
    sink: TextIO,
    template_name: str = CONFIG_TEMPLATE,
) -> None:
    """Render the configuration document into ``sink``.

    The document is streamed chunk by chunk and the sink is flushed at the
    end. Rendering is not transactional, a failure leaves whatever was
    already written in the sink.

    Args:
        config: Fully populated bridge configuration
        sink: Writable text stream
        template_name: Skeleton to render

    Raises:
        SinkWriteError: If the sink fails on write or flush, or is already closed
        MalformedModelError: If the model is missing a value the skeleton needs
    """
    template = get_template(template_name)

    for chunk in _generate(template, build_context(config)):
        try:
            sink.write(chunk)
        except (OSError, ValueError) as e:
            raise SinkWriteError(str(e)) from e

    try:
        sink.flush()
    except (OSError, ValueError) as e:
        raise SinkWriteError(str(e)) from e


def _target_mode(path: Path) -> int:
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class DocumentRenderer:
    """Renders bridge configuration to the annotated configuration file.

    Usage:
        renderer = DocumentRenderer()
        renderer.render(config, sys.stdout)
    """

    def __init__(self, template_name: str = CONFIG_TEMPLATE) -> None:
        """Initialize the document renderer.

        Args:
            template_name: Skeleton file inside the package templates
        """
        self.template_name = template_name

    def render(self, config: BridgeConfig, sink: TextIO) -> None:
        """Render ``config`` into ``sink``, see ``render``."""
        render(config, sink, self.template_name)

    def render_to_string(self, config: BridgeConfig) -> str:
        """Render ``config`` into memory.

        Args:
            config: Bridge configuration

        Returns:
            The complete document
        """
        buffer = io.StringIO()
        self.render(config, buffer)
        rendered = buffer.getvalue()
        logger.debug("Rendered configuration document (%d characters)", len(rendered))
        return rendered

    def render_to_file(self, config: BridgeConfig, output_path: Path) -> Path:
        """Render ``config`` and atomically replace ``output_path``.

        The document is rendered in memory first, then written to a temp
        file in the target directory and renamed over the destination, so
        readers never observe a partial document. An existing destination
        keeps its permission bits, a new one gets 0666 under the umask.

        Args:
            config: Bridge configuration
            output_path: Destination file

        Returns:
            Path to written file

        Raises:
            SinkWriteError: If the file cannot be written
        """
        content = self.render_to_string(config)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(
                dir=output_path.parent, prefix=f".{output_path.name}.", suffix=".tmp"
            )
        except OSError as e:
            raise SinkWriteError(f"{output_path}: {e}") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            os.chmod(temp_name, _target_mode(output_path))
            os.replace(temp_name, output_path)
        except OSError as e:
            Path(temp_name).unlink(missing_ok=True)
            raise SinkWriteError(f"{output_path}: {e}") from e

        logger.info("Wrote configuration file to %s", output_path)
        return output_path
