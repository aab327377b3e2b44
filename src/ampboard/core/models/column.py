"""Folder column models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

TRUTHY_VALUES = {"1", "true", "on", "yes"}


class UrlRules(BaseModel):
    """Regex pair controlling which folders a column lists and how they are named.

    ``match`` decides inclusion; ``replace`` is a pattern whose matches are
    stripped from the folder name. Both empty means no rule.
    """

    model_config = ConfigDict(extra="ignore")

    match: str = ""
    replace: str = ""

    @field_validator("match", "replace", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def is_empty(self) -> bool:
        return not self.match.strip() and not self.replace.strip()


class Column(BaseModel):
    """A configured folder group, persisted as one record of folders.json."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str = ""
    href: str | None = None
    dir: str = ""
    exclude_list: list[str] = Field(default_factory=list, alias="excludeList")
    url_rules: UrlRules | None = Field(default=None, alias="urlRules")
    link_template: str = Field(default="basic", alias="linkTemplate")
    disable_links: bool = Field(default=False, alias="disableLinks")
    special_cases: dict[str, str] = Field(default_factory=dict, alias="specialCases")

    @field_validator("exclude_list", mode="before")
    @classmethod
    def _unique_names(cls, value: Any) -> Any:
        if value is None:
            return []
        if not isinstance(value, list):
            return value
        seen: dict[str, None] = {}
        for item in value:
            name = str(item)
            if name.strip():
                seen.setdefault(name, None)
        return list(seen)

    @field_validator("disable_links", mode="before")
    @classmethod
    def _normalise_bool(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in TRUTHY_VALUES

    @field_validator("special_cases", mode="before")
    @classmethod
    def _stringify_cases(cls, value: Any) -> Any:
        if value is None or value == []:
            return {}
        if isinstance(value, dict):
            return {str(k): "" if v is None else str(v) for k, v in value.items()}
        return value

    @field_validator("link_template", mode="before")
    @classmethod
    def _default_template(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return "basic"
        return value
