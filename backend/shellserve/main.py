"""
Application factory.

Builds the FastAPI app with the request pipeline installed in a fixed
order (recovery outermost, request logging inside it) and the index
template loaded up front.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.templating import Jinja2Templates
from jinja2 import Template, TemplateError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import pages
from .core.colors import palette_for
from .core.config import Settings, get_settings
from .core.errors import TemplateLoadError
from .middleware import pipeline

logger = logging.getLogger("shellserve.main")

INDEX_TEMPLATE = "index.html"


def load_template(directory: str, name: str = INDEX_TEMPLATE) -> Template:
    """Load a page template, raising TemplateLoadError if it is missing or broken."""
    templates = Jinja2Templates(directory=directory)
    try:
        return templates.get_template(name)
    except (TemplateError, OSError) as exc:
        raise TemplateLoadError(name, directory, str(exc) or type(exc).__name__) from exc


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    index_template = load_template(settings.TEMPLATE_DIR)
    palette = palette_for(settings.LOG_COLOR)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        middleware=pipeline(palette),
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.palette = palette
    app.state.index_template = index_template

    app.include_router(pages.router)
    app.add_exception_handler(StarletteHTTPException, pages.http_exception_handler)

    logger.debug("Application created with template dir %s", settings.TEMPLATE_DIR)
    return app
