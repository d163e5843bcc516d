"""Declarative capability definitions.

A capability is data: a :class:`CapabilityDescriptor`, the input fields it
accepts, an optional body hook and a result normalizer. Request bodies are
assembled from a :class:`ParameterContext` so the same definition serves the
HTTP API, the CLI and schema aggregation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Protocol

from ..exceptions import ValidationError
from ..jobs.jobs_models import CapabilityDescriptor

BodyHook = Callable[[dict[str, Any], "ParameterContext"], dict[str, Any]]
ResultNormalizer = Callable[[Mapping[str, Any]], Mapping[str, Any]]


def passthrough(payload: Mapping[str, Any]) -> Mapping[str, Any]:
    """Keep every field of the provider response."""

    return payload


@dataclass(frozen=True, slots=True)
class InputField:
    """One user-facing input of a capability."""

    name: str
    display_name: str
    type: str = "string"
    default: Any = ""
    required: bool = False
    description: str = ""
    options: tuple[tuple[str, Any], ...] = ()
    type_options: Mapping[str, Any] | None = None
    display_options: Mapping[str, Any] | None = None
    # Helper fields are read by a body hook instead of being sent as-is.
    send: bool = True

    def as_dict(self) -> dict[str, Any]:
        schema: dict[str, Any] = {
            "displayName": self.display_name,
            "name": self.name,
            "type": self.type,
            "default": self.default,
        }
        if self.required:
            schema["required"] = True
        if self.description:
            schema["description"] = self.description
        if self.options:
            schema["options"] = [{"name": label, "value": value} for label, value in self.options]
        if self.type_options:
            schema["typeOptions"] = dict(self.type_options)
        if self.display_options:
            schema["displayOptions"] = {
                key: {name: list(values) for name, values in conditions.items()}
                for key, conditions in self.display_options.items()
            }
        return schema


class ParameterContext(Protocol):
    """Source of runtime parameter values."""

    def get_parameter(self, name: str, default: Any = None) -> Any: ...


@dataclass(slots=True)
class MappingParameterContext:
    """Parameter context backed by a plain mapping."""

    values: Mapping[str, Any] = field(default_factory=dict)

    def get_parameter(self, name: str, default: Any = None) -> Any:
        return self.values.get(name, default)


class NullParameterContext:
    """Context used where only the schema is needed."""

    def get_parameter(self, name: str, default: Any = None) -> Any:
        raise RuntimeError(f"Parameter '{name}' requested without a runtime context")


NULL_CONTEXT = NullParameterContext()


def is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def coerce_value(input_field: InputField, value: Any) -> Any:
    """Convert string input to the field's declared type."""

    if input_field.type == "number" and isinstance(value, str):
        text = value.strip()
        try:
            number = float(text)
        except ValueError:
            raise ValidationError(
                f"{input_field.display_name} must be a number, got '{value}'"
            ) from None
        return int(number) if number.is_integer() and "." not in text else number
    if input_field.type == "boolean" and isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "1", "yes"}:
            return True
        if lowered in {"false", "0", "no"}:
            return False
        raise ValidationError(f"{input_field.display_name} must be a boolean, got '{value}'")
    if input_field.type == "options" and input_field.options:
        allowed = [option_value for _, option_value in input_field.options]
        if value not in allowed:
            raise ValidationError(
                f"{input_field.display_name} must be one of {', '.join(map(str, allowed))}"
            )
    return value


@dataclass(frozen=True, slots=True)
class Capability:
    """Data variant describing one model of one provider."""

    descriptor: CapabilityDescriptor
    fields: tuple[InputField, ...] = ()
    static_body: Mapping[str, Any] = field(default_factory=dict)
    input_key: str | None = None
    body_hook: BodyHook | None = None
    normalize: ResultNormalizer = passthrough

    @property
    def id(self) -> str:
        return self.descriptor.id

    def input_schema(self) -> list[dict[str, Any]]:
        return [input_field.as_dict() for input_field in self.fields]

    def build_body(self, context: ParameterContext) -> dict[str, Any]:
        """Collect field values, validate required ones and drop empty optionals."""

        params: dict[str, Any] = {}
        for input_field in self.fields:
            if not input_field.send:
                continue
            value = context.get_parameter(input_field.name, input_field.default)
            if is_empty(value):
                if input_field.required:
                    raise ValidationError(f"{input_field.display_name} is required")
                continue
            params[input_field.name] = coerce_value(input_field, value)

        if self.body_hook is not None:
            params = self.body_hook(params, context)

        if self.input_key:
            return {**self.static_body, self.input_key: params}
        return {**self.static_body, **params}


@dataclass(slots=True)
class BoundCapability:
    """A capability paired with the parameter context of one invocation."""

    capability: Capability
    context: ParameterContext

    @property
    def descriptor(self) -> CapabilityDescriptor:
        return self.capability.descriptor

    def input_schema(self) -> list[dict[str, Any]]:
        return self.capability.input_schema()

    def build_request(self) -> dict[str, Any]:
        return self.capability.build_body(self.context)

    def normalize(self, payload: Mapping[str, Any]) -> Mapping[str, Any]:
        return self.capability.normalize(payload)


__all__ = [
    "BodyHook",
    "ResultNormalizer",
    "InputField",
    "ParameterContext",
    "MappingParameterContext",
    "NullParameterContext",
    "NULL_CONTEXT",
    "Capability",
    "BoundCapability",
    "passthrough",
    "is_empty",
    "coerce_value",
]
