"""Pydantic models for the external-dns webhook wire format."""

from typing import Any, Iterable, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_serializer,
    model_validator,
)

from hosts_webhook.utils.exceptions import DecodeError

MEDIA_TYPE = "application/vnd.external-dns.webhook+json;version=1"

# Record type of every endpoint read from the hosts file
ADDRESS_RECORD = "A"


class WireModel(BaseModel):
    """
    Base for webhook payload models.

    Keys are matched case-insensitively on input, so both ``"Create"`` and
    ``"create"`` decode. Unset, empty and zero fields are left out on output.
    """

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def match_keys(cls, data: Any, info: ValidationInfo) -> Any:
        if not isinstance(data, dict):
            return data

        aliases = {}
        for name, field_info in cls.model_fields.items():
            alias = field_info.alias or name
            aliases[alias.lower()] = alias

        # Python field names are for code, payloads only know wire names
        if info.mode == "json":
            return {
                aliases[key.lower()]: value
                for key, value in data.items()
                if key.lower() in aliases
            }

        return {
            aliases.get(key.lower(), key) if isinstance(key, str) else key: value
            for key, value in data.items()
        }

    @model_serializer(mode="wrap")
    def omit_empty(self, handler):
        data = handler(self)

        return {
            key: value
            for key, value in data.items()
            if value not in (None, "", 0, [], {})
        }


class ProviderSpecificProperty(WireModel):
    """Provider specific name/value pair attached to an endpoint."""

    name: str = ""
    value: str = ""


class Endpoint(WireModel):
    """A single DNS record."""

    dns_name: str = Field("", alias="dnsName")
    targets: List[str] = Field(default_factory=list)
    record_type: str = Field("", alias="recordType")
    set_identifier: Optional[str] = Field(None, alias="setIdentifier")
    record_ttl: Optional[int] = Field(None, alias="recordTTL")
    labels: Optional[dict[str, str]] = None
    provider_specific: Optional[List[ProviderSpecificProperty]] = Field(
        None, alias="providerSpecific"
    )

    @field_validator("targets", mode="before")
    @classmethod
    def null_targets_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class ChangeSet(WireModel):
    """Records to create, update and delete, as sent by the controller."""

    create: List[Endpoint] = Field(default_factory=list)
    update_old: List[Endpoint] = Field(default_factory=list, alias="updateOld")
    update_new: List[Endpoint] = Field(default_factory=list, alias="updateNew")
    delete: List[Endpoint] = Field(default_factory=list)

    @field_validator("create", "update_old", "update_new", "delete", mode="before")
    @classmethod
    def null_list_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class DomainFilter(WireModel):
    """Zones the provider accepts. Empty means no restriction."""

    include: Optional[List[str]] = None
    exclude: Optional[List[str]] = None
    regex_include: Optional[str] = Field(None, alias="regexInclude")
    regex_exclude: Optional[str] = Field(None, alias="regexExclude")


_endpoint_list = TypeAdapter(List[Endpoint])


def decode_changes(body: bytes) -> ChangeSet:
    """Decode a request body into a ChangeSet, raising DecodeError on failure."""
    try:
        return ChangeSet.model_validate_json(body)
    except ValidationError as e:
        raise DecodeError(str(e)) from e


def decode_endpoints(body: bytes) -> List[Endpoint]:
    """Decode a request body into a list of endpoints."""
    try:
        return _endpoint_list.validate_json(body)
    except ValidationError as e:
        raise DecodeError(str(e)) from e


def encode_endpoints(endpoints: Iterable[Endpoint]) -> bytes:
    """Encode endpoints as a JSON array in wire form."""
    return _endpoint_list.dump_json(list(endpoints), by_alias=True)


def encode_model(model: WireModel) -> bytes:
    """Encode a single wire model as JSON."""
    return model.model_dump_json(by_alias=True).encode()
