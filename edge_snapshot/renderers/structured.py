"""
JSON and YAML renderers

Complete resource objects are flattened into plain mappings before they are
serialized, so the output does not depend on how the typed models order or
name their fields. A kind with a single item is printed as a standalone
object; two or more items are wrapped in a v1 List.
"""

import json
from typing import Any, Dict, List, TextIO

import yaml

from ..models import OutputFormat, ResourceGroups

LIST_KIND = "List"
LIST_API_VERSION = "v1"


def to_generic(obj: Any) -> Dict[str, Any]:
    """Flatten a typed object into a generic key-value mapping"""
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return obj.model_dump(mode="json", by_alias=True, exclude_none=True)


def wrap_list(items: List[Any]) -> Dict[str, Any]:
    """Build a List container holding the given objects"""
    return {
        "apiVersion": LIST_API_VERSION,
        "items": [to_generic(item) for item in items],
        "kind": LIST_KIND,
        "metadata": {
            "resourceVersion": "",
            "selfLink": "",
        },
    }


class StructuredRenderer:
    """Renders complete resource objects as JSON or YAML documents"""

    def __init__(self, out: TextIO, output_format: OutputFormat):
        if output_format not in (OutputFormat.JSON, OutputFormat.YAML):
            raise ValueError(f"Unsupported structured format: {output_format.value!r}")
        self.out = out
        self.output_format = output_format
        self._printed = 0

    def _dump(self, obj: Dict[str, Any]) -> str:
        if self.output_format == OutputFormat.JSON:
            return json.dumps(obj, indent=4, ensure_ascii=False) + "\n"
        return yaml.safe_dump(obj, default_flow_style=False, sort_keys=False, allow_unicode=True)

    def print_obj(self, obj: Dict[str, Any]) -> None:
        """Write one document; YAML documents after the first get a separator"""
        if self.output_format == OutputFormat.YAML and self._printed:
            self.out.write("---\n")
        self.out.write(self._dump(obj))
        self._printed += 1

    def render(self, groups: ResourceGroups) -> None:
        for _, items in groups.in_render_order():
            if len(items) == 1:
                self.print_obj(to_generic(items[0]))
            else:
                self.print_obj(wrap_list(items))
