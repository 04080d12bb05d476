"""Mock Config Schemas — Pydantic models for the user-authored .mockapi.yml document.

Invariants:
    - Field names follow the document's camelCase keys via aliases; Python side is snake_case
    - A Rule is a tagged variant: bare string → SimpleRule, mapping → GuardedRule
    - Rule lists are validated up front; a method value that is NOT a list is kept as-is
      so the resolver can report it as a route-table defect (500), not a client error
    - All models are frozen: rules are immutable for the lifetime of one resolution

Design Decisions:
    - Callable Discriminator over try-each-member unions: a mapping with a "path" key
      must never silently degrade into a SimpleRule (ADR: no ad hoc presence checks)
    - Per-method errors re-raised as ValueError with the method name prefixed, so the
      config error list points at the offending route list
"""

from typing import Annotated, Any, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)

from mockapi.core.domain_types import CONFIG_FILE_NAME, NotificationMethod


class NotificationPolicy(BaseModel):
    """Deferred outbound call armed by a guarded rule."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    follow_prop: str = Field(alias="followProp", min_length=1)
    notification_method: NotificationMethod = Field(
        NotificationMethod.GET, alias="notificationMethod",
    )
    timeout_in_second: float = Field(0, alias="timeoutInSecond", ge=0)

    @field_validator("notification_method", mode="before")
    @classmethod
    def upper_method(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v


class SimpleRule(BaseModel):
    """Bare path template — returns the located data, no body contract."""
    model_config = ConfigDict(frozen=True)

    path: str

    @model_validator(mode="before")
    @classmethod
    def from_bare_path(cls, v: Any) -> Any:
        if isinstance(v, str):
            return {"path": v}
        return v


class GuardedRule(BaseModel):
    """Path template with a body contract and an optional notification policy."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    path: str
    body_fields: dict[str, bool] = Field(default_factory=dict, alias="bodyFields")
    restricted_body: bool = Field(False, alias="restrictedBody")
    schedule_notification: NotificationPolicy | None = Field(
        None, alias="scheduleNotification",
    )


def _rule_kind(value: Any) -> str | None:
    if isinstance(value, (str, SimpleRule)):
        return "simple"
    if isinstance(value, (dict, GuardedRule)):
        return "guarded"
    return None


Rule = Annotated[
    Union[
        Annotated[SimpleRule, Tag("simple")],
        Annotated[GuardedRule, Tag("guarded")],
    ],
    Discriminator(_rule_kind),
]

_RULE_LIST = TypeAdapter(list[Rule])


class MockApiConfig(BaseModel):
    """Root of the configuration document."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    api_route_prefix: str = Field("/", alias="apiRoutePrefix")
    db_file: str = Field(CONFIG_FILE_NAME, alias="dbFile")
    db_data_path: str = Field("", alias="dbDataPath")
    routes: dict[str, Any]

    @field_validator("routes")
    @classmethod
    def parse_rule_lists(cls, v: dict[str, Any]) -> dict[str, Any]:
        parsed: dict[str, Any] = {}
        for method, rules in v.items():
            if not isinstance(rules, list):
                parsed[method] = rules
                continue
            try:
                parsed[method] = _RULE_LIST.validate_python(rules)
            except ValidationError as e:
                raise ValueError(
                    f"invalid rule list for method '{method}': "
                    + "; ".join(_format_error(err) for err in e.errors())
                )
        return parsed


def _format_error(err: dict) -> str:
    location = ".".join(str(loc) for loc in err["loc"])
    return f"{location}: {err['msg']}" if location else err["msg"]
