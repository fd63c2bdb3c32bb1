"""
Response entity formatting.

Applies the per-backend data manipulation options of a BackendConfig to a
Response: target extraction, allow/deny filtering, key mapping and grouping.
"""

from typing import Any, Dict, List, Protocol

from ..models.request import BackendConfig, Response


class EntityFormatter(Protocol):
    def format(self, response: Response) -> Response: ...


def _split(paths: List[str]) -> List[List[str]]:
    return [path.split(".") for path in paths if path]


def _allow(data: Dict[str, Any], paths: List[List[str]]) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for path in paths:
        source: Any = data
        for key in path:
            if not isinstance(source, dict) or key not in source:
                break
            source = source[key]
        else:
            dest = result
            for key in path[:-1]:
                dest = dest.setdefault(key, {})
            dest[path[-1]] = source
    return result


def _deny(data: Dict[str, Any], paths: List[List[str]]) -> Dict[str, Any]:
    result = dict(data)
    for path in paths:
        parent: Any = result
        for key in path[:-1]:
            child = parent.get(key) if isinstance(parent, dict) else None
            if not isinstance(child, dict):
                parent = None
                break
            # copy on write, the original payload is left untouched
            child = dict(child)
            parent[key] = child
            parent = child
        if isinstance(parent, dict):
            parent.pop(path[-1], None)
    return result


class PropertyFilterFormatter:
    """Formatter built from a BackendConfig's manipulation options."""

    def __init__(self, backend: BackendConfig):
        self.target = backend.target
        self.allow = _split(backend.allow)
        self.deny = _split(backend.deny)
        self.mapping = dict(backend.mapping)
        self.group = backend.group

    def format(self, response: Response) -> Response:
        data = response.data

        if self.target:
            extracted = data.get(self.target)
            data = extracted if isinstance(extracted, dict) else {}

        if self.allow:
            data = _allow(data, self.allow)
        elif self.deny:
            data = _deny(data, self.deny)

        if self.mapping:
            data = {self.mapping.get(key, key): value for key, value in data.items()}

        if self.group:
            data = {self.group: data}

        return response.model_copy(update={"data": data})


def new_entity_formatter(backend: BackendConfig) -> EntityFormatter:
    return PropertyFilterFormatter(backend)
