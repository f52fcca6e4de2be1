"""network composer"""

import logging
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Any, Callable, TypeVar

from serde import SerdeError, from_dict

from netcompose.config import Config
from netcompose.fieldpath import get_bool, get_integer, get_string
from netcompose.function import FunctionRequest, FunctionResponse
from netcompose.models import (
    ConversionError,
    FieldPathError,
    GeneratedUnit,
    NetcomposeError,
    RequestError,
    ResponseError,
    TopologySpec,
    UnitKind,
)
from netcompose.schema import (
    NETWORK_ID_LABEL,
    VPC_ID_LABEL,
    WIRE_KINDS,
    WireKind,
    to_wire,
)

_LOGGER = logging.getLogger(__name__)


def unit_name(kind: UnitKind, topology_id: str, index: int) -> str:
    """deterministic name of the unit of the given kind for replica index"""
    return f"{kind.prefix}-{topology_id}-{index}"


T = TypeVar("T")


def _lookup(getter: Callable[[Any, str], T], obj: Any, path: str, zero: T) -> T:
    """typed field lookup, a missing or mistyped field yields zero"""
    try:
        return getter(obj, path)
    except FieldPathError:
        return zero


def merge(
    desired: MutableMapping[str, Any], insertions: Iterable[tuple[str, Any]]
) -> MutableMapping[str, Any]:
    """upsert insertions into desired by name, in order; keys not produced by
    insertions are left alone"""
    for name, resource in insertions:
        desired[name] = resource
    return desired


class Composer:
    """Turns a composite network resource into VPCs and, optionally, one
    InternetGateway per VPC. Gateways are linked to their VPC through a label
    selector since no VPC id exists before the VPC is provisioned."""

    def __init__(
        self,
        cfg: Config | None = None,
        kinds: Mapping[UnitKind, WireKind] = WIRE_KINDS,
    ):
        self.config = cfg or Config()
        self.kinds = kinds

    def extract_spec(self, composite: Mapping[str, Any]) -> TopologySpec:
        """read the topology intent, missing or mistyped fields become zero
        values and the region / provider config defaults apply when empty"""
        count = _lookup(get_integer, composite, "spec.count", 0)
        region = _lookup(get_string, composite, "spec.region", "")
        provider = _lookup(get_string, composite, "spec.providerConfigName", "")
        raw = {
            "id": _lookup(get_string, composite, "spec.id", ""),
            "count": max(count, 0),
            "includeGateway": _lookup(get_bool, composite, "spec.includeGateway", False),
            "region": region or self.config.region,
            "providerConfigName": provider or self.config.provider_config_name,
        }
        try:
            return from_dict(TopologySpec, raw)
        except SerdeError as exc:
            raise RequestError(f"cannot decode topology spec: {exc}") from exc

    def network_unit(self, spec: TopologySpec, index: int) -> GeneratedUnit:
        name = unit_name(UnitKind.NETWORK, spec.id, index)
        return GeneratedUnit(
            name=name,
            kind=UnitKind.NETWORK,
            labels={NETWORK_ID_LABEL: spec.id, VPC_ID_LABEL: name},
            parameters={
                "region": spec.region,
                "cidrBlock": str(self.config.cidr_block),
                "enableDnsSupport": True,
                "enableDnsHostnames": True,
            },
            provider_config_ref=spec.provider_config_name,
        )

    def gateway_unit(
        self, spec: TopologySpec, index: int, network: GeneratedUnit
    ) -> GeneratedUnit:
        """internet gateway selecting its VPC by the VPC's vpc-id label"""
        return GeneratedUnit(
            name=unit_name(UnitKind.GATEWAY, spec.id, index),
            kind=UnitKind.GATEWAY,
            labels={NETWORK_ID_LABEL: spec.id},
            parameters={
                "region": spec.region,
                "vpcIdSelector": {
                    "matchControllerRef": True,
                    "matchLabels": {VPC_ID_LABEL: network.name},
                },
            },
            provider_config_ref=spec.provider_config_name,
        )

    def synthesize(self, spec: TopologySpec) -> Iterator[GeneratedUnit]:
        """yield the units for every replica in increasing index order"""
        for index in range(spec.count):
            network = self.network_unit(spec, index)
            yield network
            if spec.include_gateway:
                yield self.gateway_unit(spec, index, network)

    def compose(self, spec: TopologySpec) -> Iterator[tuple[str, dict[str, Any]]]:
        """yield (name, manifest) insertions for the desired resources"""
        for unit in self.synthesize(spec):
            _LOGGER.debug("Composed %s", unit.name, extra={"kind": unit.kind.name})
            yield unit.name, to_wire(unit, self.kinds)

    def run(self, request: FunctionRequest) -> FunctionResponse:
        """run the function for a single request, netcompose errors are reported
        as a fatal response instead of being raised"""
        _LOGGER.info("Running function", extra={"tag": request.tag})
        rsp = FunctionResponse.to(request, ttl=self.config.ttl)

        try:
            composite = request.observed_composite()
        except RequestError as exc:
            return self._fatal(rsp, "cannot get observed composite resource", exc)

        try:
            spec = self.extract_spec(composite)
        except RequestError as exc:
            return self._fatal(rsp, "cannot read topology spec", exc)

        try:
            desired = request.desired_resources()
        except RequestError as exc:
            return self._fatal(rsp, "cannot get desired composed resources", exc)

        try:
            merge(desired, self.compose(spec))
        except ConversionError as exc:
            return self._fatal(rsp, "cannot compose network resources", exc)

        try:
            rsp.set_desired_resources(desired)
        except ResponseError as exc:
            return self._fatal(rsp, "cannot set desired composed resources", exc)

        _LOGGER.info(
            "Function ran OK",
            extra={
                "id": spec.id,
                "count": spec.count,
                "includeGateway": spec.include_gateway,
                "region": spec.region,
                "providerConfigName": spec.provider_config_name,
            },
        )
        return rsp

    @staticmethod
    def _fatal(
        rsp: FunctionResponse, context: str, exc: NetcomposeError
    ) -> FunctionResponse:
        message = f"{context}: {exc}"
        _LOGGER.error(message)
        rsp.fatal(message)
        return rsp
