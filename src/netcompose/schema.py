"""wire representation of generated units

WIRE_KINDS maps each UnitKind to the apiVersion and kind of the managed
resource it becomes. to_wire() consults the table passed to it, a unit whose
kind is not in the table cannot be converted.
"""

import copy
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from netcompose.models import ConversionError, GeneratedUnit, UnitKind

LABEL_PREFIX = "networks.meta.fn.crossplane.io/"
NETWORK_ID_LABEL = LABEL_PREFIX + "network-id"
VPC_ID_LABEL = LABEL_PREFIX + "vpc-id"

EC2_API_VERSION = "ec2.aws.upbound.io/v1beta1"


@dataclass(frozen=True)
class WireKind:
    """apiVersion and kind of a managed resource"""

    api_version: str
    kind: str


WIRE_KINDS: Mapping[UnitKind, WireKind] = {
    UnitKind.NETWORK: WireKind(EC2_API_VERSION, "VPC"),
    UnitKind.GATEWAY: WireKind(EC2_API_VERSION, "InternetGateway"),
}


def to_wire(
    unit: GeneratedUnit, kinds: Mapping[UnitKind, WireKind] = WIRE_KINDS
) -> dict[str, Any]:
    """convert a generated unit into a managed resource manifest"""
    try:
        wire = kinds[unit.kind]
    except KeyError as exc:
        raise ConversionError(
            f"cannot convert {unit.name}: no wire kind for {unit.kind.name}"
        ) from exc
    return {
        "apiVersion": wire.api_version,
        "kind": wire.kind,
        "metadata": {
            "name": unit.name,
            "labels": dict(unit.labels),
        },
        "spec": {
            "forProvider": copy.deepcopy(unit.parameters),
            "providerConfigRef": {"name": unit.provider_config_ref},
        },
    }
