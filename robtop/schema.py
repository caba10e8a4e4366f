"""Field schemas of RobTop-format objects.

Objects are plain dataclasses. Every field that appears on the wire is
declared with :func:`robtop_field`, which stores its key and kind in the
dataclass field metadata. :func:`schema_of` turns those declarations into the
ordered field list the decoder and the encoders interpret. The field order of
the dataclass is the wire order; for list-like formats it is the only thing
identifying a field.

Example::

    @robtop_format(":", map_like=False)
    @dataclass
    class Creator:
        user_id: int = robtop_field(kind=U64)
        name: str = robtop_field(kind=STR)
        account_id: Optional[int] = robtop_field(kind=DefaultToNone(U64))

List-like fields may leave out the key; their 1-based position is used.
"""

from __future__ import annotations
import dataclasses
from typing import Any, Callable, Dict, List, Optional

from .errors import DeserializeError

META_KEY = "robtop"
_SCHEMA_ATTR = "__robtop_schema__"


def robtop_field(
    key: Any = None,
    kind: Any = None,
    *,
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
    omit_if: Optional[Callable[[Any], bool]] = None,
    **kwargs: Any,
) -> Any:
    """Declare a dataclass field that is (de)serialized in RobTop's formats.

    Args:
        key: Wire key (map-like formats and request forms) or 1-based position
            label (list-like formats). May be left out for list-like schemas,
            which then use the field's position. A lone positional argument
            is taken as the kind: ``robtop_field(U64)``
        kind: Field kind from :mod:`robtop.kinds`
        default: Value used when the field is absent from the input
        default_factory: Factory variant of ``default``
        omit_if: Predicate; if it returns true for the field's value, the
            field is left out of request forms entirely
        **kwargs: Passed through to :func:`dataclasses.field`

    Returns:
        A :func:`dataclasses.field` carrying the descriptor in its metadata

    Raises:
        TypeError: If no kind is given
    """
    if kind is None and key is not None and not isinstance(key, str):
        key, kind = None, key
    if kind is None:
        raise TypeError("robtop_field() needs a kind")
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[META_KEY] = (key, kind, omit_if)
    return dataclasses.field(default=default, default_factory=default_factory, metadata=metadata, **kwargs)


def robtop_format(delimiter: str, map_like: bool = True):
    """Class decorator recording the indexed format of a schema class."""
    def wrap(cls):
        cls.__robtop_delimiter__ = delimiter
        cls.__robtop_map_like__ = map_like
        return cls
    return wrap


@dataclasses.dataclass(frozen=True)
class FieldSpec:
    """One field of a schema: attribute name, wire key and kind."""
    name: str
    key: str
    kind: Any
    has_default: bool
    omit_if: Optional[Callable[[Any], bool]] = None

    @property
    def optional(self) -> bool:
        return self.kind.optional

    @property
    def thunk(self) -> bool:
        return self.kind.thunk


class Schema:
    """Ordered field list of a schema class."""

    def __init__(self, cls: type, fields: List[FieldSpec], delimiter: Optional[str], map_like: bool):
        self.cls = cls
        self.fields = fields
        self.by_key: Dict[str, FieldSpec] = {spec.key: spec for spec in fields}
        self.delimiter = delimiter
        self.map_like = map_like

    @property
    def name(self) -> str:
        return self.cls.__name__

    def build(self, values: Dict[str, Any]) -> Any:
        """Instantiate the schema class from decoded values.

        Absent fields fall back to their default, then to ``None`` if they are
        optional or ignored.

        Raises:
            DeserializeError: If a required field is absent
        """
        for spec in self.fields:
            if spec.name in values or spec.has_default:
                continue
            if spec.optional or spec.kind.ignored:
                values[spec.name] = None
            else:
                raise DeserializeError(f"missing field `{spec.key}`", index=spec.key)
        return self.cls(**values)

    def __repr__(self) -> str:
        return f"Schema({self.name}, {[spec.key for spec in self.fields]})"


def schema_of(cls: type) -> Schema:
    """Return the (cached) schema of a dataclass declared with robtop_field.

    Raises:
        TypeError: If ``cls`` is not a dataclass, declares a key twice or
            leaves out a key in a map-like format
    """
    schema = cls.__dict__.get(_SCHEMA_ATTR)
    if schema is not None:
        return schema
    if not dataclasses.is_dataclass(cls):
        raise TypeError(f"{cls!r} is not a dataclass")

    map_like = getattr(cls, "__robtop_map_like__", True)
    specs: List[FieldSpec] = []
    seen = set()
    for f in dataclasses.fields(cls):
        meta = f.metadata.get(META_KEY)
        if meta is None:
            continue
        key, kind, omit_if = meta
        if key is None:
            if map_like:
                raise TypeError(f"{cls.__name__}.{f.name} needs a key in a map-like format")
            key = str(len(specs) + 1)
        if key in seen:
            raise TypeError(f"{cls.__name__} declares key {key!r} twice")
        seen.add(key)
        has_default = f.default is not dataclasses.MISSING or f.default_factory is not dataclasses.MISSING
        specs.append(FieldSpec(f.name, key, kind, has_default, omit_if))

    schema = Schema(
        cls,
        specs,
        getattr(cls, "__robtop_delimiter__", None),
        map_like,
    )
    setattr(cls, _SCHEMA_ATTR, schema)
    return schema
