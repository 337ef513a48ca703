from typing import Final


DEFAULT_DELIMITER: Final[str] = "."

SEGMENT_WILDCARD: Final[str] = "*"
MULTI_SEGMENT_WILDCARD: Final[str] = "**"

SOURCE_SUFFIXES: Final[tuple[str, ...]] = (".pyc", ".py")
PATH_SEPARATORS: Final[tuple[str, ...]] = ("/", "\\")

GENERATED_NAME_MARKER: Final[str] = "__autogenerated__"
COMPLETE_MARKER: Final[str] = "__autogenerate_complete__"
PARENT_PACKAGE_MARKER: Final[str] = "__autogenerated_parent__"

ORIGIN_PREFIX: Final[str] = "autogenerate"
