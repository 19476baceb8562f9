# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
JSON registry file I/O adapter.

Reads and writes tenant/body layout registries and engine
configuration in JSON format. Every record is validated on the way in.
"""
import json
import logging
from typing import Any

from orrery.ports import LayoutRegistryReader, LayoutRegistryWriter
from orrery.domain.config import LayoutConfig
from orrery.domain.serialization import center_from_record, orbit_from_record
from orrery.domain.validation import validate_index

logger = logging.getLogger(__name__)


def _validate_entity(entity: Any, kind: str) -> None:
    if not isinstance(entity, dict):
        raise ValueError(f"{kind} entry must be an object, got {type(entity).__name__}")
    entity_id = entity.get('id')
    if not isinstance(entity_id, str) or not entity_id:
        raise ValueError(f"{kind} id must be a non-empty string, got {entity_id!r}")
    validate_index(entity.get('index'), f"{kind} {entity_id} index")


def validate_registry(registry: Any) -> dict[str, Any]:
    """
    Check the structure of a layout registry.

    Raises:
        ValueError: On missing/invalid ids, indices, centers or orbits,
            or duplicate tenant indices / body indices within a tenant.
    """
    if not isinstance(registry, dict) or not isinstance(registry.get('tenants'), list):
        raise ValueError("Registry must be an object with a 'tenants' list")

    tenant_indices: set[int] = set()
    for tenant in registry['tenants']:
        _validate_entity(tenant, "tenant")
        if tenant['index'] in tenant_indices:
            raise ValueError(f"Duplicate tenant index {tenant['index']}")
        tenant_indices.add(tenant['index'])
        if tenant.get('center') is not None:
            center_from_record(tenant['center'])

        bodies = tenant.setdefault('bodies', [])
        if not isinstance(bodies, list):
            raise ValueError(f"tenant {tenant['id']} bodies must be a list")
        body_indices: set[int] = set()
        for body in bodies:
            _validate_entity(body, "body")
            if body['index'] in body_indices:
                raise ValueError(
                    f"Duplicate body index {body['index']} in tenant {tenant['id']}"
                )
            body_indices.add(body['index'])
            if body.get('orbit') is not None:
                orbit_from_record(body['orbit'])
    return registry


def load_layout_config(path: str) -> LayoutConfig:
    """Read a LayoutConfig override file."""
    with open(path, encoding='utf-8') as f:
        data = json.load(f)
    config = LayoutConfig.from_dict(data)
    logger.debug("Loaded layout config from %s", path)
    return config


class JsonRegistryReader(LayoutRegistryReader):
    """Reads layout registries from JSON files."""

    def read_registry(self, path: str) -> dict[str, Any]:
        with open(path, encoding='utf-8') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in {path}: {e}") from e
        return validate_registry(data)

    def read_config(self, path: str) -> LayoutConfig:
        try:
            return load_layout_config(path)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e


class JsonRegistryWriter(LayoutRegistryWriter):
    """Writes layout registries to JSON files."""

    def write_registry(self, registry: dict[str, Any], path: str) -> None:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(registry, f, indent=2, ensure_ascii=False)
