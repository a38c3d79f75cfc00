"""Invoke compute operations by method name.

A small registry maps method names (e.g. "ImageCreateOrUpdate") to their
ordered parameter definitions and a runner. This backs three commands:

- ``compute methods``: list registered methods and their parameters
- ``compute argument-list METHOD``: emit an argument template to fill in
- ``compute invoke METHOD ARGS...``: parse positional arguments into the
  declared types and run the method

Example:
    >>> [p.name for p in dynamic_parameters("ImageCreateOrUpdate")]
    ['ResourceGroupName', 'ImageName', 'Image']
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from azmgmt import image_mapper
from azmgmt.compute.image_client import ImageClient
from azmgmt.models.image import ImageSpec

logger = logging.getLogger(__name__)


class MethodInvocationError(Exception):
    """Raised when method arguments are missing or malformed."""

    pass


class MethodNotFoundError(MethodInvocationError):
    """Raised when no method is registered under a name."""

    pass


@dataclass(frozen=True)
class MethodParameter:
    """One positional parameter of a compute method."""

    name: str
    position: int
    annotation: type
    mandatory: bool = True
    allow_null: bool = True

    def default(self) -> Any:
        """Empty template value used by argument lists."""
        if self.annotation is ImageSpec:
            return ImageSpec()
        if self.annotation is str:
            return ""
        return None


@dataclass(frozen=True)
class Argument:
    """Named argument value, as produced by create_argument_list."""

    name: str
    value: Any

    def to_dict(self) -> dict[str, Any]:
        value = image_mapper.to_dict(self.value) if isinstance(self.value, ImageSpec) else self.value
        return {"name": self.name, "value": value}


@dataclass(frozen=True)
class ComputeMethod:
    """A named compute operation."""

    name: str
    description: str
    parameters: tuple[MethodParameter, ...]
    runner: Callable[..., Any] = field(compare=False)
    destructive: bool = False

    @property
    def mandatory_count(self) -> int:
        return sum(1 for p in self.parameters if p.mandatory)


_REGISTRY: dict[str, ComputeMethod] = {}


def register(method: ComputeMethod) -> ComputeMethod:
    """Register a compute method under its name."""
    positions = [p.position for p in method.parameters]
    if positions != sorted(positions):
        raise ValueError(f"Parameters of {method.name} must be ordered by position")
    _REGISTRY[method.name] = method
    return method


def get_method(method_name: str) -> ComputeMethod:
    """Look up a method by name (case-insensitive).

    Raises:
        MethodNotFoundError: If no method has this name
    """
    for name, method in _REGISTRY.items():
        if name.lower() == method_name.lower():
            return method
    available = ", ".join(sorted(_REGISTRY))
    raise MethodNotFoundError(f"Unknown method: {method_name}. Available methods: {available}")


def list_methods() -> list[ComputeMethod]:
    return [_REGISTRY[name] for name in sorted(_REGISTRY)]


def dynamic_parameters(method_name: str) -> list[MethodParameter]:
    """Return the ordered parameter definitions of a method."""
    return list(get_method(method_name).parameters)


def create_argument_list(method_name: str) -> list[Argument]:
    """Return an argument template with empty values for a method."""
    return [Argument(p.name, p.default()) for p in get_method(method_name).parameters]


def parse_parameter(value: Any, annotation: type) -> Any:
    """Convert a raw argument into the declared parameter type.

    Accepts Argument objects (their value is used), JSON strings, dicts and
    ImageSpec instances.

    Raises:
        MethodInvocationError: If the value cannot be converted
    """
    if isinstance(value, Argument):
        value = value.value
    if isinstance(value, dict) and set(value) == {"name", "value"}:
        value = value["value"]

    if value is None:
        return None

    if annotation is ImageSpec:
        if isinstance(value, ImageSpec):
            return value
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except json.JSONDecodeError as e:
                raise MethodInvocationError(f"Image argument is not valid JSON: {e}") from e
        try:
            return image_mapper.from_dict(value)
        except image_mapper.ImageMappingError as e:
            raise MethodInvocationError(f"Invalid image argument: {e}") from e

    if annotation is str:
        if not isinstance(value, str):
            raise MethodInvocationError(f"Expected a string, got: {value!r}")
        return value

    return value


def bind_arguments(
    method_name: str, arguments: Sequence[Any]
) -> tuple[ComputeMethod, list[Any]]:
    """Check arity and convert raw positional arguments to parameter types.

    Needs no Azure client, so argument errors surface before any login.

    Raises:
        MethodNotFoundError: If the method is unknown
        MethodInvocationError: If arguments are missing or malformed
    """
    method = get_method(method_name)
    params = method.parameters

    if len(arguments) > len(params):
        raise MethodInvocationError(
            f"{method.name} takes {len(params)} argument(s), got {len(arguments)}"
        )
    if len(arguments) < method.mandatory_count:
        missing = ", ".join(p.name for p in params[len(arguments) :] if p.mandatory)
        raise MethodInvocationError(f"{method.name} is missing argument(s): {missing}")

    parsed = [parse_parameter(arg, param.annotation) for arg, param in zip(arguments, params)]
    for param, value in zip(params, parsed):
        if value is None and not param.allow_null:
            raise MethodInvocationError(f"{param.name} cannot be null")
    return method, parsed


def invoke_method(client: ImageClient, method_name: str, arguments: Sequence[Any]) -> Any:
    """Run a registered method with positional arguments.

    Args:
        client: ImageClient used by image methods
        method_name: Registered method name
        arguments: Raw positional arguments

    Returns:
        Whatever the method returns

    Raises:
        MethodNotFoundError: If the method is unknown
        MethodInvocationError: If arguments are missing or malformed
    """
    method, parsed = bind_arguments(method_name, arguments)
    logger.debug(f"Invoking {method.name} with {len(parsed)} argument(s)")
    return method.runner(client, *parsed)


register(
    ComputeMethod(
        name="ImageCreateOrUpdate",
        description="Create or update a managed image",
        parameters=(
            MethodParameter("ResourceGroupName", 1, str),
            MethodParameter("ImageName", 2, str),
            MethodParameter("Image", 3, ImageSpec),
        ),
        runner=lambda client, rg, name, image: client.create_or_update(rg, name, image),
    )
)

register(
    ComputeMethod(
        name="ImageGet",
        description="Get a managed image",
        parameters=(
            MethodParameter("ResourceGroupName", 1, str),
            MethodParameter("ImageName", 2, str),
            MethodParameter("Expand", 3, str, mandatory=False),
        ),
        runner=lambda client, rg, name, expand=None: client.get(rg, name, expand=expand),
    )
)

register(
    ComputeMethod(
        name="ImageList",
        description="List managed images in the subscription",
        parameters=(),
        runner=lambda client: client.list(),
    )
)

register(
    ComputeMethod(
        name="ImageListByResourceGroup",
        description="List managed images in a resource group",
        parameters=(MethodParameter("ResourceGroupName", 1, str),),
        runner=lambda client, rg: client.list(resource_group=rg),
    )
)

register(
    ComputeMethod(
        name="ImageDelete",
        description="Delete a managed image",
        parameters=(
            MethodParameter("ResourceGroupName", 1, str),
            MethodParameter("ImageName", 2, str),
        ),
        runner=lambda client, rg, name: client.delete(rg, name),
        destructive=True,
    )
)


__all__ = [
    "Argument",
    "bind_arguments",
    "ComputeMethod",
    "MethodInvocationError",
    "MethodNotFoundError",
    "MethodParameter",
    "create_argument_list",
    "dynamic_parameters",
    "get_method",
    "invoke_method",
    "list_methods",
    "parse_parameter",
    "register",
]
