import logging
from importlib import import_module

__all__ = ["register_blueprints"]

log = logging.getLogger(__name__)

BLUEPRINT_MODULES = (
    "salon_app.blueprints.core",
    "salon_app.blueprints.appointments.routes",
)


def register_blueprints(app) -> None:
    """Register project blueprints exactly once (idempotent)."""
    for mod_name in BLUEPRINT_MODULES:
        module = import_module(mod_name)
        bp = getattr(module, "bp", None)
        if bp is None:
            log.warning("Module %s has no blueprint", mod_name)
            continue
        if bp.name in app.blueprints:
            continue
        app.register_blueprint(bp)
        log.debug("Registered blueprint %s", bp.name)

    if "core.index" in app.view_functions and "index" not in app.view_functions:
        app.add_url_rule("/", endpoint="index", view_func=app.view_functions["core.index"])
