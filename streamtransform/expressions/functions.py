"""Helper functions available to expressions.

``json_path`` and ``xpath`` let an expression pick values out of structured
payloads without decoding them by hand::

    json_path(payload, "$.order.id")
    xpath(payload, "./customer/name")
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Optional
from defusedxml import ElementTree as ET
from jsonpath_ng import parse as parse_json_path


def _as_document(data: Any) -> Any:
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode("utf-8")
    if isinstance(data, str):
        return json.loads(data)
    return data


def json_path(data: Any, path: str) -> Any:
    """Evaluate the JSONPath ``path`` against ``data``.

    ``data`` may be a parsed document or JSON text. A single match returns
    the matched value, several matches return a list and no match returns
    ``None``.
    """

    matches = [match.value for match in parse_json_path(path).find(_as_document(data))]
    if not matches:
        return None
    if len(matches) == 1:
        return matches[0]
    return matches


def xpath(data: Any, path: str) -> Optional[str]:
    """Return the text of the first element matching ``path`` in an XML document.

    Paths use the ElementTree subset of XPath and are evaluated relative to
    the document root. Documents declaring entities are refused with
    ``defusedxml.EntitiesForbidden``.
    """

    if isinstance(data, (bytes, bytearray)):
        root = ET.fromstring(bytes(data))
    else:
        root = ET.fromstring(str(data))
    found = root.find(path)
    if found is None:
        return None
    return found.text


DEFAULT_FUNCTIONS: Dict[str, Callable[..., Any]] = {
    "json_path": json_path,
    "xpath": xpath,
}
