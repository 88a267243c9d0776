"""Exception types raised outside the per-request pipeline."""


class ShellServeError(Exception):
    """Base class for shellserve errors."""


class TemplateLoadError(ShellServeError):
    """A page template could not be loaded at startup."""

    def __init__(self, name: str, directory: str, reason: str):
        self.name = name
        self.directory = directory
        super().__init__(f"cannot load template {name!r} from {directory}: {reason}")


class ListenerError(ShellServeError):
    """The HTTP listener failed on its background thread."""
