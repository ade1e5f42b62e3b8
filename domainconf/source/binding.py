"""Bind configuration sections onto pydantic settings models.

Binding mirrors a hierarchical configuration binder:

- an absent section yields the model's defaults
- keys match fields case-insensitively, ignoring "_" and "-"
  ("SmtpServer", "smtpServer" and "smtp_server" all bind smtp_server)
- unknown keys are ignored, null values leave the default in place
- a value that cannot be parsed for its field is logged and dropped

Binding never raises for bad configuration.
"""

import types
from collections.abc import Callable
from typing import Any, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel, ValidationError

from domainconf.observability.logging import get_logger
from domainconf.source.base import ConfigurationSection

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# (section, model_type) -> bound model
Binder = Callable[[ConfigurationSection, type[ModelT]], ModelT]

_MAX_REPAIR_PASSES = 5


def canonical_key(key: str) -> str:
    """Case- and separator-insensitive form of a key."""
    return key.replace("_", "").replace("-", "").lower()


def section_to_data(section: ConfigurationSection) -> Any:
    """Materialize a section into plain dicts, lists and strings.

    Children keyed "0".."n-1" become a list; a leaf yields its string value.
    """
    children = section.get_children()
    if not children:
        return section.value

    keys = [child.key for child in children]
    if all(key.isdigit() for key in keys):
        ordered = sorted(children, key=lambda child: int(child.key))
        return [section_to_data(child) for child in ordered]

    return {child.key: section_to_data(child) for child in children}


def _nested_model_type(annotation: Any) -> type[BaseModel] | None:
    """Return the model class behind Model or Model | None, if any."""
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation

    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        for arg in get_args(annotation):
            if isinstance(arg, type) and issubclass(arg, BaseModel):
                return arg
    return None


def normalize_keys(data: dict[str, Any], model_type: type[BaseModel]) -> dict[str, Any]:
    """Rename keys of data to model field names, recursing into nested models.

    Unknown keys and None values are dropped.
    """
    lookup: dict[str, str] = {}
    for name, field in model_type.model_fields.items():
        lookup[canonical_key(name)] = name
        if field.alias:
            lookup[canonical_key(field.alias)] = name

    result: dict[str, Any] = {}
    for key, value in data.items():
        name = lookup.get(canonical_key(str(key)))
        if name is None or value is None:
            continue

        nested = _nested_model_type(model_type.model_fields[name].annotation)
        if nested is not None and isinstance(value, dict):
            value = normalize_keys(value, nested)

        result[name] = value
    return result


def _drop_location(data: dict[str, Any], loc: tuple[Any, ...]) -> bool:
    """Remove the value at an error location. Returns True if removed.

    Locations are truncated at the first list index so a bad list element
    drops the whole list field.
    """
    path: list[str] = []
    for part in loc:
        if isinstance(part, int):
            break
        path.append(str(part))
    if not path:
        return False

    node: Any = data
    for part in path[:-1]:
        if not isinstance(node, dict) or part not in node:
            return False
        node = node[part]

    if isinstance(node, dict) and path[-1] in node:
        del node[path[-1]]
        return True
    return False


def validate_tolerant(
    model_type: type[ModelT],
    data: dict[str, Any],
    origin: str,
) -> ModelT:
    """Validate data, dropping unparsable values until the model builds.

    Args:
        model_type: Settings model to build
        data: Normalized field data (modified in place)
        origin: Section path or file name, for logging

    Returns:
        The model, falling back to model_type() if repair fails
    """
    for _ in range(_MAX_REPAIR_PASSES):
        try:
            return model_type.model_validate(data)
        except ValidationError as exc:
            dropped = False
            for error in exc.errors():
                loc = tuple(error["loc"])
                logger.error(
                    "settings_value_unparsable",
                    origin=origin,
                    settings_type=model_type.__name__,
                    field=".".join(str(part) for part in loc),
                    error=error["msg"],
                )
                dropped = _drop_location(data, loc) or dropped
            if not dropped:
                break

    logger.error(
        "settings_bind_failed",
        origin=origin,
        settings_type=model_type.__name__,
    )
    return model_type()


def bind_section(section: ConfigurationSection, model_type: type[ModelT]) -> ModelT:
    """Bind a configuration section onto a settings model.

    Args:
        section: Section to bind (may not exist)
        model_type: Settings model class; every field must have a default

    Returns:
        A new model instance
    """
    if not section.exists():
        return model_type()

    data = section_to_data(section)
    if not isinstance(data, dict):
        # A scalar or list where an object was expected
        if data is not None:
            logger.warning(
                "settings_section_not_an_object",
                origin=section.path,
                settings_type=model_type.__name__,
            )
        return model_type()

    return validate_tolerant(model_type, normalize_keys(data, model_type), section.path)
