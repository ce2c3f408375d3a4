"""Full generation run: every artifact of a project as {filename: content}."""

import logging

from api_spec_kit.config import Settings
from api_spec_kit.generator.appendix import build_document
from api_spec_kit.generator.descriptor import build_descriptor
from api_spec_kit.model.base import Project
from api_spec_kit.sdk.targets import get_emitter

logger = logging.getLogger(__name__)

DESCRIPTOR_FILE = "openapi.yaml"
DOCUMENT_FILE = "appendix.html"
SDK_BASENAME = "client"


def generate_artifacts(
    project: Project,
    target: str | None = None,
    settings: Settings | None = None,
    rtl: bool = True,
) -> dict[str, str]:
    """Descriptor, SDK source and appendix document for one project snapshot."""
    settings = settings or Settings()
    emitter = get_emitter(target or settings.default_target, settings)
    logger.debug("Generating %d operations for %r (%s SDK)", len(project.requests), project.name, emitter.target)

    return {
        DESCRIPTOR_FILE: build_descriptor(project, settings),
        f"{SDK_BASENAME}{emitter.file_extension}": emitter.emit(project),
        DOCUMENT_FILE: build_document(project, title=project.name, rtl=rtl),
    }
