"""SDK target selection."""

import logging

from api_spec_kit.config import Settings
from api_spec_kit.model.base import Project
from api_spec_kit.sdk.emitter import SdkEmitter
from api_spec_kit.sdk.python_emitter import PythonEmitter
from api_spec_kit.sdk.typescript_emitter import TypeScriptEmitter

logger = logging.getLogger(__name__)

EMITTERS: dict[str, type[SdkEmitter]] = {
    "typescript": TypeScriptEmitter,
    "python": PythonEmitter,
}

ALIASES = {
    "ts": "typescript",
    "node": "typescript",
    "javascript": "typescript",
    "node-express": "typescript",
    "py": "python",
    "python-fastapi": "python",
    "python-requests": "python",
}


def resolve_target(selector: str | None, settings: Settings | None = None) -> str:
    """Canonical target name; unknown selectors fall back to the default target."""
    settings = settings or Settings()
    key = (selector or "").strip().lower()
    key = ALIASES.get(key, key)
    if key in EMITTERS:
        return key

    default = ALIASES.get(settings.default_target.lower(), settings.default_target.lower())
    if default not in EMITTERS:
        default = "typescript"
    if key:
        logger.warning("Unknown SDK target %r, falling back to %s", selector, default)
    return default


def get_emitter(selector: str | None, settings: Settings | None = None) -> SdkEmitter:
    settings = settings or Settings()
    return EMITTERS[resolve_target(selector, settings)](settings)


def emit(project: Project, target: str | None = None, settings: Settings | None = None) -> str:
    """Generate SDK source text for a project."""
    return get_emitter(target, settings).emit(project)
