"""Module-level bindings used by the population and resolver tests."""

from typing import Annotated

from envbind import EnvVar, populate

SERVICE_NAME: Annotated[str, EnvVar("SERVICE_NAME")] = "unset"
WORKERS: Annotated[int, EnvVar("SERVICE_WORKERS")] = 0
VERBOSE: Annotated[bool, EnvVar("SERVICE_VERBOSE")] = False
_TOKEN: Annotated[str, EnvVar("SERVICE_TOKEN")] = ""
UNBOUND: int = 7


def load(environ):
    populate(environ=environ)


def load_with_token(environ, caller):
    populate(caller=caller, environ=environ)
