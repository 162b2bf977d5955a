from enum import Enum

from pydantic import BaseModel, Field, field_validator
from rich.errors import StyleSyntaxError
from rich.style import Style


class LogLevel(str, Enum):
    debug = "debug"
    info = "info"
    warning = "warning"
    error = "error"
    critical = "critical"


class ParseSettings(BaseModel):
    # Stop reading a hunk once both declared counts are satisfied. Lets
    # trailers like the '-- ' signature of format-patch mails pass as noise.
    stop_at_declared_counts: bool = False


class RenderSettings(BaseModel):
    # Write '@@ -5 +5 @@' instead of '@@ -5,1 +5,1 @@', as GNU diff does.
    omit_unit_counts: bool = False


class DisplaySettings(BaseModel):
    """
    Styles used by unipatch.display when turning patches into rich renderables.
    Every style is a rich style definition such as "bold red" or "dim".
    """

    show_line_numbers: bool = False
    header_style: str = "bold"
    range_style: str = "cyan"
    add_style: str = "green"
    remove_style: str = "red"
    context_style: str = ""
    marker_style: str = "dim"

    @field_validator(
        "header_style",
        "range_style",
        "add_style",
        "remove_style",
        "context_style",
        "marker_style",
    )
    @classmethod
    def _validate_style(cls, v: str) -> str:
        try:
            Style.parse(v)
        except StyleSyntaxError as exc:
            raise ValueError(f"Invalid style {v!r}: {exc}") from exc
        return v


class Settings(BaseModel):
    parse: ParseSettings = Field(default_factory=ParseSettings)
    render: RenderSettings = Field(default_factory=RenderSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    log_level: LogLevel = LogLevel.warning
