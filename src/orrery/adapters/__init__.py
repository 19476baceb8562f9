# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for registry I/O and frame export.

External dependencies (json, csv, file I/O) are confined to this layer.
"""
from orrery.adapters.json_io import (
    JsonRegistryReader,
    JsonRegistryWriter,
    load_layout_config,
    validate_registry,
)
from orrery.adapters.csv_exporter import CsvFrameExporter

__all__ = [
    "JsonRegistryReader",
    "JsonRegistryWriter",
    "load_layout_config",
    "validate_registry",
    "CsvFrameExporter",
]
