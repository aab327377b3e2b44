"""Link template model."""

from pydantic import BaseModel, ConfigDict

URL_NAME_PLACEHOLDER = "{urlName}"


class Template(BaseModel):
    """A named HTML fragment rendered once per listed folder.

    Every occurrence of ``{urlName}`` in ``html`` is replaced by the
    escaped folder name.
    """

    model_config = ConfigDict(extra="ignore")

    name: str
    html: str = ""
