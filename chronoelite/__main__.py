"""Run the catalog API through the Litestar CLI."""

from __future__ import annotations

import os
import sys
from typing import NoReturn


def run_cli() -> NoReturn:
    """Preset the application path, host and port, then hand over to ``litestar``."""
    from chronoelite.lib.settings import get_settings

    settings = get_settings()
    os.environ.setdefault("LITESTAR_APP", "chronoelite.server.asgi:create_app")
    os.environ.setdefault("LITESTAR_HOST", settings.server.HOST)
    os.environ.setdefault("LITESTAR_PORT", str(settings.server.PORT))
    try:
        from litestar.cli.main import litestar_group
    except ImportError as exc:
        print(  # noqa: T201
            "Could not load required libraries.",
            "Please check your installation and make sure you activated any necessary virtual environment",
        )
        print(exc)  # noqa: T201
        sys.exit(1)
    sys.exit(litestar_group())  # type: ignore[func-returns-value]


if __name__ == "__main__":
    run_cli()
