"""Shape pydantic validation errors into the response ``details`` tree."""

from typing import Any

from pydantic import ValidationError


def format_validation_errors(exc: ValidationError) -> dict[str, Any]:
    """Nest error messages by field path.

    Every node is a dict with an ``_errors`` list; child fields hang off the
    node under their own key. Errors about the body as a whole (e.g. a JSON
    array instead of an object) land in the root ``_errors``.

    Example::

        {"_errors": [], "name": {"_errors": ["String should have at least 1 character"]}}
    """
    tree: dict[str, Any] = {"_errors": []}
    for error in exc.errors(include_url=False):
        node = tree
        for part in error["loc"]:
            node = node.setdefault(str(part), {"_errors": []})
        node["_errors"].append(error["msg"])
    return tree


def failed_fields(details: dict[str, Any]) -> list[str]:
    """Top-level field names that carry at least one error."""
    return sorted(key for key in details if key != "_errors")
