"""HTTP layer: versioned blueprints mounted under ``API_BASE_PREFIX``."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def join_prefix(*segments: str) -> str:
    """Join URL segments into ``/a/b``, skipping empty ones."""

    return "/" + "/".join(s.strip("/") for s in segments if s.strip("/"))


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Mount every ``(blueprint, relative_prefix)`` pair below ``base_prefix``.

    An empty relative prefix mounts the blueprint at ``base_prefix`` itself.
    """

    for bp, rel_prefix in entries:
        app.register_blueprint(bp, url_prefix=join_prefix(base_prefix, rel_prefix))


def init_app(app: Flask) -> None:
    """Register API v1, e.g. ``/api/v1/auth/login``."""

    from tokenauth.api import v1

    register_blueprint_group(
        app,
        base_prefix=join_prefix(app.config.get("API_BASE_PREFIX", "/api"), v1.API_VERSION),
        entries=v1.REGISTRY,
    )


__all__ = ["init_app", "join_prefix", "register_blueprint_group"]
