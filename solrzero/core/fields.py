"""
Schema field descriptors.

A descriptor is a plain dict ready to be sent in an `add-field` or
`replace-field` schema command, e.g.

    FieldBuilder("age").type("pint").stored(True).build()
    # => {"name": "age", "type": "pint", "stored": True}

Property names follow
https://solr.apache.org/guide/8_5/defining-fields.html#field-properties
"""
from typing import Any, Dict, Optional

from solrzero.core.config import config
from solrzero.core.exceptions import ValidationError

# Applied before explicit properties when the strict policy is enabled.
STRICT_DEFAULTS: Dict[str, Any] = {
    "stored": True,
    "indexed": True,
    "docValues": True,
    "uninvertible": True,
    "multiValued": False,
    "required": False,
}


class FieldBuilder:
    def __init__(self, name: str, defaults: Optional[bool] = None):
        """
        :param name: The name of the field.
        :param defaults: Pre-populate STRICT_DEFAULTS. None defers to the
            `field_defaults` configuration key.
        """
        self.name = name
        self.defaults = config.field_defaults if defaults is None else defaults
        self._properties: Dict[str, Any] = {}

    def set(self, prop: str, value: Any) -> "FieldBuilder":
        """Set an arbitrary field property."""
        self._properties[prop] = value
        return self

    def type(self, typename: str) -> "FieldBuilder":
        return self.set("type", typename)

    def default(self, value: Any) -> "FieldBuilder":
        """Value used for documents without the field."""
        return self.set("default", value)

    def indexed(self, indexed: bool = True) -> "FieldBuilder":
        return self.set("indexed", indexed)

    def stored(self, stored: bool = True) -> "FieldBuilder":
        return self.set("stored", stored)

    def doc_values(self, doc_values: bool = True) -> "FieldBuilder":
        return self.set("docValues", doc_values)

    def sort_missing_first(self, value: bool = True) -> "FieldBuilder":
        return self.set("sortMissingFirst", value)

    def sort_missing_last(self, value: bool = True) -> "FieldBuilder":
        return self.set("sortMissingLast", value)

    def multi_valued(self, multi_valued: bool = True) -> "FieldBuilder":
        return self.set("multiValued", multi_valued)

    def uninvertible(self, uninvertible: bool = True) -> "FieldBuilder":
        return self.set("uninvertible", uninvertible)

    def omit_norms(self, omit_norms: bool = True) -> "FieldBuilder":
        return self.set("omitNorms", omit_norms)

    def omit_term_freq_and_positions(self, value: bool = True) -> "FieldBuilder":
        return self.set("omitTermFreqAndPositions", value)

    def omit_positions(self, value: bool = True) -> "FieldBuilder":
        return self.set("omitPositions", value)

    def term_vectors(self, value: bool = True) -> "FieldBuilder":
        return self.set("termVectors", value)

    def term_positions(self, value: bool = True) -> "FieldBuilder":
        return self.set("termPositions", value)

    def term_offsets(self, value: bool = True) -> "FieldBuilder":
        return self.set("termOffsets", value)

    def term_payloads(self, value: bool = True) -> "FieldBuilder":
        return self.set("termPayloads", value)

    def required(self, required: bool = True) -> "FieldBuilder":
        return self.set("required", required)

    def use_doc_values_as_stored(self, value: bool = True) -> "FieldBuilder":
        return self.set("useDocValuesAsStored", value)

    def large(self, large: bool = True) -> "FieldBuilder":
        """Lazy-load the field value."""
        return self.set("large", large)

    def build(self) -> Dict[str, Any]:
        """
        Return the descriptor.

        Raises:
            ValidationError: If the name is empty or no type was set.
        """
        if not self.name:
            raise ValidationError({"name": "Field name must not be empty."})
        if not self._properties.get("type"):
            raise ValidationError({"type": f"Field '{self.name}' has no type."})

        descriptor: Dict[str, Any] = {"name": self.name, "type": self._properties["type"]}
        if self.defaults:
            descriptor.update(STRICT_DEFAULTS)
        for key, value in self._properties.items():
            if key not in ("name", "type"):
                descriptor[key] = value
        return descriptor

    # -- Prebuilt descriptors --

    @classmethod
    def string(cls, name: str) -> Dict[str, Any]:
        """Exact-match short text."""
        return cls(name).type("string").omit_norms().stored().build()

    @classmethod
    def multi_string(cls, name: str) -> Dict[str, Any]:
        return cls(name).type("strings").omit_norms().multi_valued().stored().build()

    @classmethod
    def text(cls, name: str) -> Dict[str, Any]:
        return cls(name).type("lowercase").stored().build()

    @classmethod
    def numeric(cls, name: str) -> Dict[str, Any]:
        return cls(name).type("pfloat").stored().build()

    @classmethod
    def double(cls, name: str) -> Dict[str, Any]:
        return cls(name).type("pdouble").stored().build()

    @classmethod
    def long(cls, name: str) -> Dict[str, Any]:
        return cls(name).type("plong").stored().build()

    @classmethod
    def fulltext(cls, name: str) -> Dict[str, Any]:
        return cls(name).type("text_general").stored().build()

    @classmethod
    def tag(cls, name: str) -> Dict[str, Any]:
        return cls(name).type("delimited_payloads_string").stored().build()

    @classmethod
    def date(cls, name: str) -> Dict[str, Any]:
        return cls(name).type("pdate").stored().build()
