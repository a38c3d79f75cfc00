"""Tag management module.

This module handles Azure resource tag handling on the client side:
building validated tag dictionaries from command-line input and filtering
listed resources by tag.

Tag input formats:
- "key=value" strings (split on the first "=")
- "key" strings (empty value)
- {"Name": key, "Value": value} mappings
- single-pair {key: value} mappings
"""

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TagError(Exception):
    """Raised when tag input is invalid."""

    pass


class TagManager:
    """Build and filter Azure resource tags.

    Limits follow Azure Resource Manager:
    - At most 50 tags per resource
    - Keys up to 512 characters, without < > % & \\ ? /
    - Values up to 256 characters
    """

    MAX_TAGS = 50
    MAX_KEY_LENGTH = 512
    MAX_VALUE_LENGTH = 256

    TAG_KEY_INVALID_CHARS = re.compile(r"[<>%&\\?/]")

    @classmethod
    def parse_tag_assignment(cls, tag_str: str) -> tuple[str, str]:
        """Parse tag assignment string.

        Args:
            tag_str: Tag in format "key=value" or "key"

        Returns:
            Tuple of (key, value); value is "" for a bare key

        Raises:
            TagError: If the key is empty
        """
        if "=" in tag_str:
            # Split only on first '=' to handle values with '='
            key, value = tag_str.split("=", 1)
        else:
            key, value = tag_str, ""

        key = key.strip()
        if not key:
            raise TagError(f"Invalid tag format: {tag_str}. Tag key cannot be empty")
        return key, value

    @classmethod
    def _pair_from_mapping(cls, tag: Mapping[str, Any]) -> tuple[str, str]:
        """Extract a key/value pair from a Name/Value or single-pair mapping."""
        lowered = {str(k).lower(): v for k, v in tag.items()}
        if "name" in lowered and set(lowered) <= {"name", "value"}:
            key = lowered["name"]
            value = lowered.get("value")
        elif len(tag) == 1:
            key, value = next(iter(tag.items()))
        else:
            raise TagError(
                f"Invalid tag: {dict(tag)}. Expected {{'Name': key, 'Value': value}} "
                "or a single key/value pair"
            )

        if key is None or not str(key).strip():
            raise TagError(f"Invalid tag: {dict(tag)}. Tag key cannot be empty")
        return str(key).strip(), "" if value is None else str(value)

    @classmethod
    def create_tag_dictionary(
        cls, tags: Iterable[str | Mapping[str, Any]] | None, validate: bool = False
    ) -> dict[str, str]:
        """Create a tag dictionary from command-line tag input.

        Args:
            tags: Tag strings or mappings (None yields an empty dictionary)
            validate: Enforce Azure tag limits and reject duplicate keys

        Returns:
            Dictionary of tag key-value pairs

        Raises:
            TagError: If a tag is malformed or, with validate, breaks a limit
        """
        result: dict[str, str] = {}
        if not tags:
            return result

        seen: set[str] = set()
        for tag in tags:
            if isinstance(tag, Mapping):
                key, value = cls._pair_from_mapping(tag)
            else:
                key, value = cls.parse_tag_assignment(tag)

            if validate:
                if key.lower() in seen:
                    raise TagError(f"Duplicate tag key: {key}")
                cls.validate_tag(key, value)
            seen.add(key.lower())
            result[key] = value

        if validate and len(result) > cls.MAX_TAGS:
            raise TagError(f"Too many tags: {len(result)}. Azure allows at most {cls.MAX_TAGS}")

        return result

    @classmethod
    def validate_tag(cls, key: str, value: str) -> None:
        """Validate a single tag against Azure limits.

        Raises:
            TagError: If the key or value is invalid
        """
        if not cls.validate_tag_key(key):
            raise TagError(
                f"Invalid tag key: {key}. Keys must be 1-{cls.MAX_KEY_LENGTH} characters "
                "and cannot contain < > % & \\ ? /"
            )
        if not cls.validate_tag_value(value):
            raise TagError(
                f"Invalid tag value for key {key}: values are limited to "
                f"{cls.MAX_VALUE_LENGTH} characters"
            )

    @classmethod
    def validate_tag_key(cls, key: str) -> bool:
        if not key or len(key) > cls.MAX_KEY_LENGTH:
            return False
        return not cls.TAG_KEY_INVALID_CHARS.search(key)

    @classmethod
    def validate_tag_value(cls, value: str) -> bool:
        return len(value) <= cls.MAX_VALUE_LENGTH

    @classmethod
    def parse_tag_filter(cls, tag_filter: str | Mapping[str, Any]) -> tuple[str, str | None]:
        """Parse tag filter.

        Args:
            tag_filter: "key", "key=value" or a tag mapping

        Returns:
            Tuple of (key, value) where value is None for key-only filters
        """
        if isinstance(tag_filter, Mapping):
            key, value = cls._pair_from_mapping(tag_filter)
            return key, value or None

        if "=" in tag_filter:
            key, value = tag_filter.split("=", 1)
            return key.strip(), value or None
        return tag_filter.strip(), None

    @classmethod
    def matches(cls, tags: Mapping[str, str] | None, key: str, value: str | None) -> bool:
        """Check if a tag dictionary satisfies a key[/value] filter.

        Key and value comparisons are case-insensitive, like ARM tag names.
        """
        if not tags:
            return False
        for tag_key, tag_value in tags.items():
            if tag_key.lower() != key.lower():
                continue
            if value is None:
                return True
            return (tag_value or "").lower() == value.lower()
        return False

    @classmethod
    def tag_predicate(cls, tag_filter: str | Mapping[str, Any]) -> Callable[[Any], bool]:
        """Build a predicate that checks a resource's ``tags`` against a filter."""
        key, value = cls.parse_tag_filter(tag_filter)
        if not key:
            raise TagError("Tag filter key cannot be empty")

        def _predicate(resource: Any) -> bool:
            return cls.matches(getattr(resource, "tags", None), key, value)

        return _predicate

    @classmethod
    def filter_by_tag(
        cls, resources: Iterable[T], tag_filter: str | Mapping[str, Any]
    ) -> list[T]:
        """Filter resources by tag.

        Args:
            resources: Objects with a ``tags`` attribute
            tag_filter: "key", "key=value" or a tag mapping

        Returns:
            Resources whose tags contain the key (case-insensitive) and,
            when a value is given, whose value matches case-insensitively
        """
        predicate = cls.tag_predicate(tag_filter)
        return [r for r in resources if predicate(r)]


__all__ = ["TagError", "TagManager"]
