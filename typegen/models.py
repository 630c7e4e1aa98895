# File: typegen/models.py
"""
NexaFlow TypeGen - Core Data Models
====================================
Pydantic V2 models representing the normalized schema snapshot and the
generation options.  These models form the single source of truth for the
entire pipeline: Schema Loading → Validation → Planning → Export.

All input models are immutable (``frozen=True``) and accept both
``snake_case`` and ``camelCase`` keys, so a YAML snapshot written for the
JavaScript tool chain (``displayName``, ``softDelete`` ...) validates
unchanged.

Property definitions form a closed set of variants selected by a callable
discriminator over the raw ``type`` tag::

    PrimitiveProperty | AssociationProperty | EnumRefProperty
    | InlineEnumProperty | SelectProperty | FileProperty
    | CustomTypeProperty
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Annotated, Any, ClassVar, Dict, FrozenSet, List, Optional, Tuple, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    PrivateAttr,
    Tag,
    computed_field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from typegen.utils import count_lines, sha256_hex

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("typegen.models")

# ---------------------------------------------------------------------------
# Enums: fixed sets used across the entire project
# ---------------------------------------------------------------------------


class SchemaKind(str, Enum):
    """Kinds of top-level schema."""

    OBJECT = "object"
    ENUM = "enum"


class RelationKind(str, Enum):
    """Association cardinalities, including the polymorphic ones."""

    ONE_TO_ONE = "OneToOne"
    MANY_TO_ONE = "ManyToOne"
    ONE_TO_MANY = "OneToMany"
    MANY_TO_MANY = "ManyToMany"
    MORPH_TO = "MorphTo"
    MORPH_ONE = "MorphOne"
    MORPH_MANY = "MorphMany"
    MORPH_TO_MANY = "MorphToMany"
    MORPHED_BY_MANY = "MorphedByMany"


class FileCategory(str, Enum):
    """Routing category of a generated file."""

    SCHEMA = "schema"
    BASE = "base"
    ENUM = "enum"
    PLUGIN_ENUM = "plugin-enum"


class OutputLayout(str, Enum):
    """Physical layout of the generated tree."""

    FLAT = "flat"
    PACKAGE = "package"


# Primitive type tags understood by the resolver.  ``Enum`` and ``Select``
# are not listed: they have their own property variants.
PRIMITIVE_TYPES: FrozenSet[str] = frozenset(
    {
        "String", "Text", "MediumText", "LongText", "Email", "Password",
        "TinyInt", "Int", "BigInt", "Float", "Boolean",
        "Date", "Time", "DateTime", "Timestamp", "Json", "Lookup",
    }
)

STRING_TYPES: FrozenSet[str] = frozenset(
    {"String", "Text", "MediumText", "LongText", "Password", "Email"}
)

NUMERIC_TYPES: FrozenSet[str] = frozenset({"TinyInt", "Int", "BigInt", "Float"})

Number = Union[int, float]
LocalizedString = Union[str, Dict[str, str]]

# ---------------------------------------------------------------------------
# Shared model configuration
# ---------------------------------------------------------------------------

_SHARED_CONFIG: ConfigDict = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    use_enum_values=True,
    validate_default=True,
    frozen=True,
    extra="ignore",
)


# ---------------------------------------------------------------------------
# Rules and enum values
# ---------------------------------------------------------------------------


class ValidationRules(BaseModel):
    """Declarative rule bag attached to a property or a compound field."""

    model_config = _SHARED_CONFIG

    # Format rules (mutually exclusive, checked in this order)
    url: bool = False
    uuid: bool = False
    ip: bool = False
    ipv4: bool = False
    ipv6: bool = False

    # Length
    min_length: Optional[int] = Field(default=None, ge=0)
    max_length: Optional[int] = Field(default=None, ge=0)

    # Character classes
    alpha: bool = False
    alpha_num: bool = False
    alpha_dash: bool = False
    numeric: bool = False
    digits: Optional[int] = Field(default=None, ge=0)
    digits_between: Optional[Tuple[int, int]] = None

    # Matching
    starts_with: Optional[Union[str, List[str]]] = None
    ends_with: Optional[Union[str, List[str]]] = None
    lowercase: bool = False
    uppercase: bool = False

    # Numeric
    min: Optional[Number] = None
    max: Optional[Number] = None
    between: Optional[Tuple[Number, Number]] = None
    gt: Optional[Number] = None
    lt: Optional[Number] = None
    multiple_of: Optional[Number] = None

    # Compound-field extras
    pattern: Optional[str] = None
    format: Optional[str] = Field(
        default=None, description="email | url | phone | postal_code"
    )


class EnumValueDefinition(BaseModel):
    """One enum value: a bare string or a ``{value, label, extra}`` record."""

    model_config = _SHARED_CONFIG

    value: str = Field(..., description="Raw value emitted as the enum member value.")
    label: Optional[LocalizedString] = None
    extra: Optional[Dict[str, Any]] = None

    @model_validator(mode="before")
    @classmethod
    def _from_scalar(cls, data: Any) -> Any:
        if isinstance(data, bool):
            return {"value": str(data).lower()}
        if isinstance(data, (str, int, float)):
            return {"value": str(data)}
        return data

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


# ---------------------------------------------------------------------------
# Compound / custom types (plugin supplied)
# ---------------------------------------------------------------------------


def _lift_nested_type_info(data: Any) -> Any:
    """Accept the ``sql: {...}`` / ``typescript: {type}`` nesting of plugin files."""
    if not isinstance(data, dict):
        return data
    lifted: Dict[str, Any] = dict(data)
    sql: Any = lifted.pop("sql", None)
    if isinstance(sql, dict):
        for key in ("nullable", "length"):
            if key in sql and key not in lifted:
                lifted[key] = sql[key]
    typescript: Any = lifted.pop("typescript", None)
    if isinstance(typescript, dict) and "type" in typescript:
        lifted.setdefault("type_hint", typescript["type"])
    return lifted


class CustomTypeField(BaseModel):
    """One expansion entry of a compound type."""

    model_config = _SHARED_CONFIG

    suffix: str = Field(..., min_length=1)
    nullable: Optional[bool] = Field(
        default=None, description="Plugin default nullability for this field."
    )
    type_hint: str = Field(default="string", description="TypeScript type of the field.")
    length: Optional[int] = Field(default=None, ge=1)
    rules: Optional[ValidationRules] = None
    label: Optional[LocalizedString] = None
    placeholder: Optional[LocalizedString] = None

    @model_validator(mode="before")
    @classmethod
    def _lift(cls, data: Any) -> Any:
        return _lift_nested_type_info(data)


class CustomTypeDefinition(BaseModel):
    """
    Plugin-defined property type.

    A compound type expands into one physical field per ``expand`` entry
    plus one read-only field per accessor.  A simple type maps onto a single
    field typed by ``type_hint``.
    """

    model_config = _SHARED_CONFIG

    name: Optional[str] = None
    compound: bool = False
    expand: List[CustomTypeField] = Field(default_factory=list)
    accessors: List[str] = Field(default_factory=list)
    type_hint: str = "string"
    length: Optional[int] = Field(default=None, ge=1)

    @model_validator(mode="before")
    @classmethod
    def _lift(cls, data: Any) -> Any:
        return _lift_nested_type_info(data)

    @field_validator("accessors", mode="before")
    @classmethod
    def _accessor_names(cls, v: Any) -> Any:
        if not isinstance(v, list):
            return v
        return [item["name"] if isinstance(item, dict) else item for item in v]


class CompoundFieldOverride(BaseModel):
    """Per-schema override of one compound expansion entry."""

    model_config = _SHARED_CONFIG

    nullable: Optional[bool] = None
    length: Optional[int] = Field(default=None, ge=1)
    display_name: Optional[LocalizedString] = None
    placeholder: Optional[LocalizedString] = None
    rules: Optional[ValidationRules] = None


class PluginEnumDefinition(BaseModel):
    """Enum supplied by a plugin; lives in its own namespace."""

    model_config = _SHARED_CONFIG

    name: str = Field(..., min_length=1)
    display_name: Optional[LocalizedString] = None
    values: List[EnumValueDefinition] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Property variants
# ---------------------------------------------------------------------------


class PropertyBase(BaseModel):
    """Fields shared by every property variant."""

    model_config = _SHARED_CONFIG

    kind: ClassVar[str] = ""

    type: str = Field(..., min_length=1, description="Raw type tag.")
    display_name: Optional[LocalizedString] = None
    placeholder: Optional[LocalizedString] = None
    nullable: Optional[bool] = None
    length: Optional[int] = Field(default=None, ge=1)
    min_length: Optional[int] = Field(default=None, ge=0)
    max_length: Optional[int] = Field(default=None, ge=0)
    min: Optional[Number] = None
    max: Optional[Number] = None
    pattern: Optional[str] = None
    rules: Optional[ValidationRules] = None
    field_overrides: Dict[str, CompoundFieldOverride] = Field(
        default_factory=dict,
        alias="fields",
        description="Compound-type overrides keyed by expansion suffix.",
    )

    @property
    def is_nullable(self) -> bool:
        return bool(self.nullable)


class PrimitiveProperty(PropertyBase):
    kind: ClassVar[str] = "primitive"


class AssociationProperty(PropertyBase):
    kind: ClassVar[str] = "association"

    relation: str = Field(..., description="One of RelationKind.")
    target: Optional[str] = None
    targets: List[str] = Field(default_factory=list)


class EnumRefProperty(PropertyBase):
    """Reference to a named enum (``EnumRef``, or ``Enum`` with a string)."""

    kind: ClassVar[str] = "enum_ref"

    enum: str = Field(..., min_length=1)


class InlineEnumProperty(PropertyBase):
    kind: ClassVar[str] = "inline_enum"

    enum: List[EnumValueDefinition] = Field(default_factory=list)


class SelectProperty(PropertyBase):
    kind: ClassVar[str] = "select"

    options: List[EnumValueDefinition] = Field(default_factory=list)


class FileProperty(PropertyBase):
    kind: ClassVar[str] = "file"

    multiple: bool = False


class CustomTypeProperty(PropertyBase):
    """Any other tag; bound to a ``CustomTypeDefinition`` at use time."""

    kind: ClassVar[str] = "custom"


def _property_kind(value: Any) -> str:
    if isinstance(value, PropertyBase):
        return value.kind
    if not isinstance(value, dict):
        return "custom"
    tag: Any = value.get("type")
    if tag == "Association":
        return "association"
    if tag == "EnumRef":
        return "enum_ref"
    if tag == "Enum":
        return "enum_ref" if isinstance(value.get("enum"), str) else "inline_enum"
    if tag == "Select":
        return "select"
    if tag == "File":
        return "file"
    if tag in PRIMITIVE_TYPES:
        return "primitive"
    return "custom"


PropertyDefinition = Annotated[
    Union[
        Annotated[PrimitiveProperty, Tag("primitive")],
        Annotated[AssociationProperty, Tag("association")],
        Annotated[EnumRefProperty, Tag("enum_ref")],
        Annotated[InlineEnumProperty, Tag("inline_enum")],
        Annotated[SelectProperty, Tag("select")],
        Annotated[FileProperty, Tag("file")],
        Annotated[CustomTypeProperty, Tag("custom")],
    ],
    Discriminator(_property_kind),
]


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------


class SchemaOptions(BaseModel):
    """Per-schema generation switches."""

    model_config = _SHARED_CONFIG

    id: bool = Field(default=True, description="Emit a primary key field.")
    id_type: str = Field(default="BigInt", description="Int | BigInt | Uuid | String")
    timestamps: bool = True
    soft_delete: bool = False
    hidden: bool = False


class SchemaDefinition(BaseModel):
    """One entity (object kind) or one named enumeration (enum kind)."""

    model_config = _SHARED_CONFIG

    name: str = Field(..., min_length=1)
    kind: SchemaKind = SchemaKind.OBJECT
    display_name: Optional[LocalizedString] = None
    properties: Dict[str, PropertyDefinition] = Field(default_factory=dict)
    values: List[EnumValueDefinition] = Field(default_factory=list)
    options: SchemaOptions = Field(default_factory=SchemaOptions)
    source_path: Optional[str] = Field(
        default=None, description="File the schema was loaded from."
    )

    @property
    def is_enum(self) -> bool:
        return self.kind == SchemaKind.ENUM

    @property
    def is_hidden(self) -> bool:
        return self.options.hidden

    @property
    def source_label(self) -> str:
        return self.source_path or f"<{self.name}>"

    def __repr__(self) -> str:
        return f"<SchemaDefinition {self.kind}:{self.name}>"


class SchemaCollection(BaseModel):
    """
    Ordered list of schemas supplied for one run.

    Kept as a list rather than a mapping so duplicate names survive loading
    and can be reported by the collision pre-pass.
    """

    model_config = _SHARED_CONFIG

    schemas: List[SchemaDefinition] = Field(default_factory=list)

    _by_name: Dict[str, SchemaDefinition] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        index: Dict[str, SchemaDefinition] = {}
        for schema in self.schemas:
            index.setdefault(schema.name, schema)
        self._by_name = index

    @classmethod
    def from_schemas(cls, *schemas: SchemaDefinition) -> "SchemaCollection":
        return cls(schemas=list(schemas))

    def get(self, name: str) -> Optional[SchemaDefinition]:
        """O(1) lookup; first declaration wins for duplicated names."""
        return self._by_name.get(name)

    @property
    def object_schemas(self) -> List[SchemaDefinition]:
        return [s for s in self.schemas if not s.is_enum]

    @property
    def enum_schemas(self) -> List[SchemaDefinition]:
        return [s for s in self.schemas if s.is_enum]

    @property
    def object_names(self) -> FrozenSet[str]:
        return frozenset(s.name for s in self.schemas if not s.is_enum)

    @property
    def enum_names(self) -> FrozenSet[str]:
        return frozenset(s.name for s in self.schemas if s.is_enum)

    def __len__(self) -> int:
        return len(self.schemas)

    def __repr__(self) -> str:
        return (
            f"<SchemaCollection {len(self.object_schemas)} objects, "
            f"{len(self.enum_schemas)} enums>"
        )


# ---------------------------------------------------------------------------
# Generation configuration
# ---------------------------------------------------------------------------


class LocaleConfig(BaseModel):
    """Locales the generated code supports and the message overrides."""

    model_config = _SHARED_CONFIG

    locales: List[str] = Field(default_factory=lambda: ["en"], min_length=1)
    default_locale: str = "en"
    fallback_locale: str = "en"
    messages: Dict[str, Dict[str, str]] = Field(
        default_factory=dict,
        description="User message templates keyed by message key then locale.",
    )


def _keyed_by_name(v: Any) -> Any:
    """Accept a list of named records or a mapping; return a name-keyed mapping."""
    if isinstance(v, list):
        keyed_list: Dict[str, Any] = {}
        for index, item in enumerate(v):
            if not isinstance(item, dict):
                continue
            if "name" not in item:
                raise ValueError(f"Entry #{index} has no 'name'.")
            keyed_list[item["name"]] = item
        return keyed_list
    if isinstance(v, dict):
        keyed: Dict[str, Any] = {}
        for key, item in v.items():
            if isinstance(item, dict) and "name" not in item:
                item = {**item, "name": key}
            keyed[key] = item
        return keyed
    return v


class GenerationConfig(BaseModel):
    """
    Options record controlling one generation run.

    A single instance of this model (combined with a ``SchemaCollection``)
    is all the planner needs to produce the full output.
    """

    model_config = _SHARED_CONFIG

    # -- Interface shape ----------------------------------------------------
    readonly: bool = Field(default=False, description="Mark interface fields readonly.")
    strict_null_checks: bool = Field(
        default=True, description="Keep '| null' members in interface types."
    )

    # -- Locale -------------------------------------------------------------
    locale_config: LocaleConfig = Field(default_factory=LocaleConfig)
    locale: Optional[str] = Field(
        default=None, description="Locale used to resolve display names."
    )
    multi_locale: bool = Field(
        default=False, description="Keep per-locale enum label maps."
    )

    # -- Plugin supplied ----------------------------------------------------
    custom_types: Dict[str, CustomTypeDefinition] = Field(default_factory=dict)
    plugin_enums: Dict[str, PluginEnumDefinition] = Field(default_factory=dict)

    # -- Output switches ----------------------------------------------------
    generate_zod_schemas: bool = True
    generate_rules: bool = Field(
        default=False, description="Legacy rules files (only without Zod)."
    )
    validation_templates: Dict[str, Dict[str, str]] = Field(default_factory=dict)

    # -- Import prefixes ----------------------------------------------------
    enum_import_prefix: Optional[str] = None
    schema_enum_import_prefix: Optional[str] = None
    plugin_enum_import_prefix: Optional[str] = None
    base_import_prefix: Optional[str] = None
    use_js_extension: bool = False

    # -- Layout -------------------------------------------------------------
    layout: OutputLayout = OutputLayout.FLAT
    package_name: str = Field(default="@schema-base", min_length=1)
    models_path: str = Field(default="models", min_length=1)

    @field_validator("custom_types", "plugin_enums", mode="before")
    @classmethod
    def _normalise_named(cls, v: Any) -> Any:
        return _keyed_by_name(v)

    @property
    def target_locale(self) -> str:
        return self.locale or self.locale_config.default_locale

    @property
    def import_extension(self) -> str:
        return ".js" if self.use_js_extension else ""

    def custom_type(self, tag: str) -> Optional[CustomTypeDefinition]:
        """O(1) lookup of a plugin type by tag."""
        return self.custom_types.get(tag)


# ---------------------------------------------------------------------------
# Generated output
# ---------------------------------------------------------------------------


class GeneratedFile(BaseModel):
    """A single virtual file produced by the planner."""

    model_config = _SHARED_CONFIG

    path: str = Field(..., min_length=1, description="Logical relative path.")
    content: str = Field(..., description="Full file content.")
    category: FileCategory = FileCategory.SCHEMA
    overwrite: bool = Field(
        default=True, description="False for create-once, user-owned files."
    )
    types: List[str] = Field(default_factory=list, description="Exported names.")

    @computed_field  # type: ignore[misc]
    @property
    def line_count(self) -> int:
        return count_lines(self.content)

    @computed_field  # type: ignore[misc]
    @property
    def size_bytes(self) -> int:
        return len(self.content.encode("utf-8"))

    @computed_field  # type: ignore[misc]
    @property
    def checksum(self) -> str:
        return sha256_hex(self.content)

    def __repr__(self) -> str:
        return f"<GeneratedFile {self.path} [{self.category}] overwrite={self.overwrite}>"


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "SchemaKind",
    "RelationKind",
    "FileCategory",
    "OutputLayout",
    "PRIMITIVE_TYPES",
    "STRING_TYPES",
    "NUMERIC_TYPES",
    "LocalizedString",
    "ValidationRules",
    "EnumValueDefinition",
    "CustomTypeField",
    "CustomTypeDefinition",
    "CompoundFieldOverride",
    "PluginEnumDefinition",
    "PropertyBase",
    "PrimitiveProperty",
    "AssociationProperty",
    "EnumRefProperty",
    "InlineEnumProperty",
    "SelectProperty",
    "FileProperty",
    "CustomTypeProperty",
    "PropertyDefinition",
    "SchemaOptions",
    "SchemaDefinition",
    "SchemaCollection",
    "LocaleConfig",
    "GenerationConfig",
    "GeneratedFile",
]

logger.debug("typegen.models loaded: %d public symbols.", len(__all__))
