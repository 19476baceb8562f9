# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for layout registry storage and frame export.

Adapters implement these to handle different file formats.
"""
from typing import Any, Protocol, runtime_checkable

from orrery.domain.config import LayoutConfig
from orrery.domain.frame import BodyPosition


@runtime_checkable
class LayoutRegistryReader(Protocol):
    """Port for reading tenant/body registries and engine configuration."""

    def read_registry(self, path: str) -> dict[str, Any]:
        """Read and validate a layout registry."""
        ...

    def read_config(self, path: str) -> LayoutConfig:
        """Read an engine configuration override file."""
        ...


@runtime_checkable
class LayoutRegistryWriter(Protocol):
    """Port for persisting an enriched layout registry."""

    def write_registry(self, registry: dict[str, Any], path: str) -> None:
        """Write registry data to output file."""
        ...


@runtime_checkable
class FrameExporter(Protocol):
    """Port for exporting one rendered frame of every cluster."""

    def export(
        self,
        frames: dict[str, list[BodyPosition]],
        path: str,
        elapsed_time: float,
    ) -> int:
        """
        Export body positions to a file.

        Args:
            frames: Tenant id → positions of that tenant's bodies.
            path: Output file path.
            elapsed_time: Scene time the frame was evaluated at.

        Returns:
            Number of bodies exported.
        """
        ...
