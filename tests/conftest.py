from __future__ import annotations

from typing import Any

import pytest

from netcompose import Composer, FunctionRequest


def make_xnetwork(**spec: Any) -> dict[str, Any]:
    """composite network resource with the given spec fields"""
    return {
        "apiVersion": "xp-layers.crossplane.io/v1alpha1",
        "kind": "XNetwork",
        "metadata": {"name": "network-code"},
        "spec": spec,
    }


def make_request(
    composite: dict[str, Any] | None = None,
    desired: dict[str, Any] | None = None,
    tag: str = "",
) -> FunctionRequest:
    document: dict[str, Any] = {}
    if tag:
        document["meta"] = {"tag": tag}
    if composite is not None:
        document["observed"] = {"composite": {"resource": composite}}
    if desired is not None:
        document["desired"] = {
            "resources": {name: {"resource": res} for name, res in desired.items()}
        }
    return FunctionRequest(document)


@pytest.fixture
def composer() -> Composer:
    return Composer()


@pytest.fixture
def code_network() -> dict[str, Any]:
    return make_xnetwork(
        id="code",
        count=1,
        includeGateway=True,
        providerConfigName="default",
        region="eu-central-1",
        compositionSelector={"matchLabels": {"layer": "code"}},
    )
