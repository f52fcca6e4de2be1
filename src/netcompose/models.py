"""
File Chain (see DEVELOPER.md):
Doc Version: v1.0.0

- Called by: compose.py, function.py, fieldpath.py, main.py
- Purpose: Core data structures and error types

NetCompose Data Models - Topology Intent, Generated Units and Errors

PURPOSE:
    Defines the typed topology intent decoded from a composite resource, the
    generated resource units the composer emits, and the exception hierarchy
    used across the package.

WHO READS ME:
    - compose.py: builds TopologySpec and GeneratedUnit instances
    - function.py: raises RequestError / ResponseError
    - fieldpath.py: raises FieldPathError
    - main.py: catches NetcomposeError for exit codes

WHO I READ:
    - None (leaf module, no internal dependencies)

DEPENDENCIES:
    - serde: @serde decorator, camelCase field renaming for TopologySpec
    - dataclasses: @dataclass decorator
    - enum: UnitKind

KEY EXPORTS:
    - NetcomposeError: Base exception class for all netcompose errors
    - FieldPathError, RequestError, ConversionError, ResponseError
    - UnitKind: kind of a generated unit, its value is the name prefix
    - TopologySpec: parsed topology intent (id, count, includeGateway, ...)
    - GeneratedUnit: one synthesized resource definition

DATA MODELS:

    TopologySpec (frozen, one per invocation):
        - id: str (naming and correlation root)
        - count: int (number of network units, never negative)
        - include_gateway: bool (pair each network unit with a gateway)
        - region: str
        - provider_config_name: str

    GeneratedUnit:
        - name: str ("<prefix>-<id>-<index>")
        - kind: UnitKind
        - labels: dict[str, str] (correlation labels)
        - parameters: dict (forProvider attributes)
        - provider_config_ref: str
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from serde import serde


class NetcomposeError(Exception):
    """Base class for all errors raised by netcompose"""


class FieldPathError(NetcomposeError):
    """a field path could not be resolved or has an unexpected type"""


class RequestError(NetcomposeError):
    """the function request does not carry what the composer needs"""


class ConversionError(NetcomposeError):
    """a generated unit could not be converted to its wire representation"""


class ResponseError(NetcomposeError):
    """the desired resources could not be written to the response"""


class UnitKind(Enum):
    """kind of a generated unit, the value doubles as the name prefix"""

    NETWORK = "vpc"
    GATEWAY = "gateway"

    @property
    def prefix(self) -> str:
        return self.value


@serde(rename_all="camelcase")
@dataclass(frozen=True)
class TopologySpec:
    """topology intent read from the observed composite resource"""

    id: str = ""
    count: int = 0
    include_gateway: bool = False
    region: str = ""
    provider_config_name: str = ""


@dataclass
class GeneratedUnit:
    """a single resource definition produced by the composer"""

    name: str
    kind: UnitKind
    labels: dict[str, str] = field(default_factory=dict)
    parameters: dict[str, Any] = field(default_factory=dict)
    provider_config_ref: str = ""
