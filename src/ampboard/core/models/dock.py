"""Dock item model."""

from pydantic import BaseModel, ConfigDict


class DockItem(BaseModel):
    """A shortcut shown in the dashboard dock."""

    model_config = ConfigDict(extra="ignore")

    label: str = ""
    url: str = ""
    icon: str = ""
    alt: str = ""
