"""
Dialog bridge.

The two callbacks an options dialog drives:

    open()          -> {"definition": "Cabinet", "options": {...}} or None
    apply(payload)  -> {"success": bool, "results": [...], "error": ...}

The definition is resolved once, when the dialog opens, and the same
definition receives the edits on apply even if the selection changed
in between.

Lengths go out as plain numbers in inches. Coming back, numbers are
read as inches but unitless text is read in the document's length
unit, as the host reads typed input. A dialog that edits lengths as
text must therefore send a unit suffix ("23.6in", "60cm") or send the
number itself; echoing an inch value as bare text in a centimetre
document stores a different length.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

from .config import EditorSettings
from .host import HostDocument
from .model import ComponentDefinition
from .projector import project_component_options
from .selection import get_selected_component_definition
from .serialization import (
    PayloadError,
    options_to_dict,
    request_from_dict,
    request_from_json,
    result_to_dict,
)
from .writer import update_component_options

logger = logging.getLogger(__name__)


class ComponentOptionsBridge:
    """One dialog session against one document."""

    def __init__(self, document: HostDocument, settings: Optional[EditorSettings] = None):
        self.document = document
        self.settings = settings or EditorSettings()
        self.definition: Optional[ComponentDefinition] = None

    def open(self) -> Optional[Dict[str, Any]]:
        """Resolve the selection and return the options payload, or None."""
        self.definition = get_selected_component_definition(self.document)
        if self.definition is None:
            logger.info("No component instance selected")
            return None
        options = project_component_options(self.definition, self.settings)
        return {"definition": self.definition.name, "options": options_to_dict(options)}

    def refresh(self) -> Optional[Dict[str, Any]]:
        """Options payload for the definition opened earlier."""
        if self.definition is None:
            return None
        options = project_component_options(self.definition, self.settings)
        return {"definition": self.definition.name, "options": options_to_dict(options)}

    def apply(self, payload: Union[str, Dict[str, Any]]) -> Dict[str, Any]:
        """
        Write an Update Request given as JSON text or an already decoded object.

        Malformed payloads never reach the document; they come back as a
        failed result carrying the error message.
        """
        try:
            if isinstance(payload, str):
                request = request_from_json(payload)
            else:
                request = request_from_dict(payload)
        except PayloadError as e:
            logger.warning(f"Rejected dialog payload: {e}")
            return {"success": False, "results": [], "error": str(e)}

        result = update_component_options(self.document, self.definition, request, self.settings)
        response = result_to_dict(result)
        response["error"] = None if result.success else "Some options could not be updated"
        return response
