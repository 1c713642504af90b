"""
Value types shared by providers, caches and the resolution service.
"""

from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional

from .errors import ProviderError

# Read-only code -> label mapping for one translation key
CodeMap = Mapping[str, str]

EMPTY_CODE_MAP: CodeMap = MappingProxyType({})


class Resolution(NamedTuple):
    """Outcome of resolving a code under a translation key."""

    label: Optional[str]
    found: bool

    @classmethod
    def of(cls, label: Optional[str]) -> "Resolution":
        if label is None:
            return NOT_FOUND
        return cls(label, True)


NOT_FOUND = Resolution(None, False)


def freeze_code_map(key: str, raw: Optional[Mapping]) -> CodeMap:
    """
    Copy a provider result into an immutable code map.

    ``None`` is treated as an empty map. Codes are stringified; entries whose
    label is ``None`` are dropped.
    """
    if raw is None:
        return EMPTY_CODE_MAP
    if not isinstance(raw, Mapping):
        raise ProviderError(key, f"expected a mapping, got {type(raw).__name__}")

    frozen = {}
    for code, label in raw.items():
        if label is None:
            continue
        if not isinstance(label, str):
            raise ProviderError(
                key,
                f"label for code {code!r} must be a string, got {type(label).__name__}"
            )
        frozen[str(code)] = label

    if not frozen:
        return EMPTY_CODE_MAP
    return MappingProxyType(frozen)
