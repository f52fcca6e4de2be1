"""
Request and response objects exchanged with the function runtime.

Both mirror the JSON form of a composition function RunFunctionRequest /
RunFunctionResponse:

    meta:     {tag}                         request and response
    observed: {composite: {resource}, resources}
    desired:  {composite: {resource}, resources: {<name>: {resource, ready}}}
    context:  arbitrary mapping, passed through
    results:  [{severity, message}]         response only

The request is read-only for the composer. A response is created from a
request with FunctionResponse.to(), which carries over the tag, the desired
state and the context so that nothing the pipeline already produced is lost.
"""

import copy
from collections.abc import Mapping
from typing import Any

from netcompose.config import DEFAULT_TTL
from netcompose.fieldpath import get_string
from netcompose.models import FieldPathError, RequestError, ResponseError

SEVERITY_FATAL = "SEVERITY_FATAL"


class FunctionRequest:
    """a single function invocation request"""

    def __init__(self, document: Mapping[str, Any] | None = None):
        self.document: dict[str, Any] = copy.deepcopy(dict(document or {}))

    @classmethod
    def from_dict(cls, document: Any) -> "FunctionRequest":
        if not isinstance(document, Mapping):
            raise RequestError(
                f"request must be a mapping, not {type(document).__name__}"
            )
        return cls(document)

    @classmethod
    def from_composite(cls, composite: Mapping[str, Any]) -> "FunctionRequest":
        """wrap a bare composite resource manifest as the observed composite"""
        return cls({"observed": {"composite": {"resource": dict(composite)}}})

    @property
    def tag(self) -> str:
        try:
            return get_string(self.document, "meta.tag")
        except FieldPathError:
            return ""

    @property
    def context(self) -> dict[str, Any]:
        context = self.document.get("context")
        return copy.deepcopy(context) if isinstance(context, Mapping) else {}

    def observed_composite(self) -> dict[str, Any]:
        """return a copy of the observed composite resource"""
        observed = self.document.get("observed")
        composite = observed.get("composite") if isinstance(observed, Mapping) else None
        if not isinstance(composite, Mapping):
            raise RequestError("request has no observed composite resource")
        resource = composite.get("resource")
        if not isinstance(resource, Mapping):
            raise RequestError("observed composite resource is not an object")
        return copy.deepcopy(dict(resource))

    def desired_resources(self) -> dict[str, dict[str, Any]]:
        """return a fresh mapping of desired composed resource name to
        resource definition"""
        desired = self.document.get("desired") or {}
        if not isinstance(desired, Mapping):
            raise RequestError("desired state is not an object")
        resources = desired.get("resources") or {}
        if not isinstance(resources, Mapping):
            raise RequestError("desired composed resources are not an object")
        result: dict[str, dict[str, Any]] = {}
        for name, entry in resources.items():
            resource = entry.get("resource") if isinstance(entry, Mapping) else None
            if not isinstance(resource, Mapping):
                raise RequestError(f"desired composed resource {name} is not an object")
            result[str(name)] = copy.deepcopy(dict(resource))
        return result


class FunctionResponse:
    """the result of a single function invocation"""

    def __init__(
        self,
        tag: str = "",
        ttl: int = DEFAULT_TTL,
        desired: Mapping[str, Any] | None = None,
        context: Mapping[str, Any] | None = None,
    ):
        self.tag = tag
        self.ttl = ttl
        self.desired: dict[str, Any] = copy.deepcopy(dict(desired or {}))
        self.context: dict[str, Any] = copy.deepcopy(dict(context or {}))
        self.results: list[dict[str, str]] = []

    @classmethod
    def to(cls, request: FunctionRequest, ttl: int = DEFAULT_TTL) -> "FunctionResponse":
        """create a response for the given request"""
        desired = request.document.get("desired")
        return cls(
            tag=request.tag,
            ttl=ttl,
            desired=desired if isinstance(desired, Mapping) else None,
            context=request.context,
        )

    def fatal(self, message: str):
        self.results.append({"severity": SEVERITY_FATAL, "message": message})

    @property
    def is_fatal(self) -> bool:
        return any(r["severity"] == SEVERITY_FATAL for r in self.results)

    def desired_resources(self) -> dict[str, dict[str, Any]]:
        resources = self.desired.get("resources") or {}
        return {
            name: entry["resource"]
            for name, entry in resources.items()
            if isinstance(entry, Mapping) and "resource" in entry
        }

    def set_desired_resources(self, resources: Mapping[str, Any]):
        """replace the desired composed resources, entries of existing
        resources keep their other fields (e.g. ready)"""
        current = self.desired.get("resources")
        if not isinstance(current, Mapping):
            current = {}
        updated: dict[str, Any] = {}
        for name, resource in resources.items():
            if not isinstance(resource, Mapping):
                raise ResponseError(f"desired composed resource {name} is not an object")
            if not resource.get("apiVersion") or not resource.get("kind"):
                raise ResponseError(
                    f"desired composed resource {name} has no apiVersion or kind"
                )
            entry = current.get(name)
            entry = dict(entry) if isinstance(entry, Mapping) else {}
            entry["resource"] = copy.deepcopy(dict(resource))
            updated[name] = entry
        self.desired["resources"] = updated

    def to_dict(self) -> dict[str, Any]:
        """render the response in its JSON form"""
        meta: dict[str, Any] = {"ttl": f"{self.ttl}s"}
        if self.tag:
            meta["tag"] = self.tag
        doc: dict[str, Any] = {"meta": meta}
        if self.desired:
            doc["desired"] = copy.deepcopy(self.desired)
        if self.results:
            doc["results"] = copy.deepcopy(self.results)
        if self.context:
            doc["context"] = copy.deepcopy(self.context)
        return doc
