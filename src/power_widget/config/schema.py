"""Settings schema using Pydantic for validation."""

from typing import Any, Optional

from pydantic import BaseModel, field_validator

from .defaults import WIDGET_HIDDEN_VALUE


class WidgetSettings(BaseModel):
    """Persisted settings file.

    The three widget keys are normalized; indicator-specific keys are kept
    as extra fields. A value of the wrong type is kept as written rather
    than failing the whole file, and readers treat it as unset.
    """

    widget_buttons: Optional[str] = None
    expanded_view_widget: Any = WIDGET_HIDDEN_VALUE
    expanded_view_widget_color: Optional[str] = None

    model_config = {"extra": "allow"}

    @field_validator("widget_buttons", "expanded_view_widget_color", mode="before")
    @classmethod
    def _as_string(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return str(value)

    @field_validator("expanded_view_widget", mode="before")
    @classmethod
    def _as_int_if_numeric(cls, value: Any) -> Any:
        # "2" and 2 both mean visible; anything else is left for get_int to reject
        if isinstance(value, str):
            try:
                return int(value)
            except ValueError:
                return value
        return value
