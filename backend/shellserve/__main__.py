"""
Run the server shell.

    python -m shellserve

Settings come from the environment or a .env file (see core/config.py).
"""

import logging
import sys

from .core.config import get_settings
from .core.errors import TemplateLoadError
from .core.logging import setup_logging
from .lifecycle import LifecycleController
from .main import create_app

logger = logging.getLogger("shellserve")


def main() -> None:
    settings = get_settings()
    setup_logging(settings)

    try:
        app = create_app(settings)
    except TemplateLoadError as exc:
        logger.critical("%s", exc)
        sys.exit(1)

    LifecycleController(app, settings).run()


if __name__ == "__main__":
    main()
