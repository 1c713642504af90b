"""
Record translation: adds label fields to records from their code fields.

This is the caller side of the resolution service. Each TranslatedField names
the code field to read, the field to write, the translation key and the
failure policy applied when no label exists.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel

from .errors import ConfigurationError
from .failure import FailurePolicy, FailureStrategy, apply_failure_policy, resolve_handler
from .models import NOT_FOUND
from .service import TranslationService


@dataclass(frozen=True)
class TranslatedField:
    """Declares one label field derived from a code field."""
    target: str
    source: str
    key: str
    on_failure: FailurePolicy = FailureStrategy.NULL


Record = Union[Mapping[str, Any], BaseModel]


class RecordTranslator:
    """Applies a fixed set of TranslatedFields to records."""

    def __init__(self, service: TranslationService, fields: Iterable[TranslatedField]):
        self.service = service
        self.fields: List[TranslatedField] = list(fields)

        targets = [f.target for f in self.fields]
        if len(targets) != len(set(targets)):
            raise ConfigurationError("duplicate target field", "fields")
        for f in self.fields:
            if not f.key:
                raise ConfigurationError(f"field {f.target!r} has no translation key", "key")
            # Fail on a bad policy now rather than on the first unresolved code
            resolve_handler(f.on_failure)

    def translate(self, record: Record) -> Dict[str, Any]:
        """Return a copy of ``record`` with every target field filled in."""
        if isinstance(record, BaseModel):
            data = record.model_dump()
        else:
            data = dict(record)

        for f in self.fields:
            data[f.target] = self._translate_field(f, data.get(f.source))
        return data

    def translate_many(self, records: Iterable[Record]) -> List[Dict[str, Any]]:
        return [self.translate(record) for record in records]

    def _translate_field(self, f: TranslatedField, value: Any) -> Optional[str]:
        code = None if value is None else str(value)
        resolution = self.service.resolve(f.key, code) if code else NOT_FOUND
        return apply_failure_policy(f.key, code, resolution, f.on_failure)
