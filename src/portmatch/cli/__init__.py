"""CLI for portmatch."""

# Import commands to register them with the app
# These imports have side effects (registering commands with @app.command())
from portmatch.cli.commands import installed as _installed_module  # noqa: F401
from portmatch.cli.commands import ports as _ports_module  # noqa: F401
from portmatch.cli.main import app, main


__all__ = ["app", "main"]
