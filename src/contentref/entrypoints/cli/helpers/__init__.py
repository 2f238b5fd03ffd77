"""CLI helpers for contentref.

Utilities used by the command-line interface: application bootstrap with
error mapping, URL sanitization for safe display, stderr message emitters
with emoji/ASCII fallbacks, and click parameter types for entity references,
kinds and locales.
"""

from .app import describe, load_app, load_entity, store_errors
from .db_url import sanitize_url
from .messages import error, success, warn
from .param_types import ENTITY_KIND, ENTITY_REF, LOCALE

__all__ = [
    "ENTITY_KIND",
    "ENTITY_REF",
    "LOCALE",
    "describe",
    "error",
    "load_app",
    "load_entity",
    "sanitize_url",
    "store_errors",
    "success",
    "warn",
]
