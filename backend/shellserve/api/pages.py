"""
Demo pages served behind the request pipeline.

The index page renders a template loaded at startup. The other routes
exist to exercise the 405, 404 and fault paths of the pipeline.
"""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

router = APIRouter(tags=["Pages"])


class _Node:
    def __init__(self, n=None):
        self.n = n


@router.get("/", response_class=HTMLResponse)
async def index(request: Request):
    """Render the index page from the template loaded at startup."""
    template = request.app.state.index_template
    return HTMLResponse(template.render(request=request, app_name=request.app.title))


@router.api_route("/get_not_allowed", methods=["POST", "PUT"], response_class=PlainTextResponse)
async def get_not_allowed(request: Request):
    """Only POST and PUT are routed here; a GET is answered with 405."""
    return PlainTextResponse(f"Ok: {request.method}")


@router.get("/nil_pointer", response_class=PlainTextResponse)
async def nil_pointer():
    """Deliberately faults so the recovery middleware has something to catch."""
    holder = _Node()
    return PlainTextResponse(str(holder.n.n))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    """Plain-text routing errors: '404 page not found' and an empty 405."""
    headers = getattr(exc, "headers", None)
    if exc.status_code == 404:
        return PlainTextResponse("404 page not found\n", status_code=404, headers=headers)
    if exc.status_code == 405:
        return PlainTextResponse("", status_code=405, headers=headers)
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=headers)
