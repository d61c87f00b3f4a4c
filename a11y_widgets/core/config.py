"""Pydantic settings for widget controllers.

Each controller takes its own config model. WidgetSettings bundles the three
and can be loaded from environment variables so a host can tune behavior
without code changes.

Example:
    settings = WidgetSettings.from_env()
    carousel = CarouselController(
        count=len(slides),
        timer=timer,
        media=reduced_motion,
        config=settings.carousel,
    )
"""

from collections.abc import Mapping
from os import environ
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from a11y_widgets.core.errors import ConfigurationError

DEFAULT_PAGE_SIZE = 6
DEFAULT_INTERVAL_MS = 5000


class PagedListConfig(BaseModel):
    """Settings for a paginated shelf."""

    page_size: int = Field(DEFAULT_PAGE_SIZE, ge=1, description="Items per page")

    model_config = ConfigDict(frozen=True)


class CarouselConfig(BaseModel):
    """Settings for an autoplaying carousel."""

    interval_ms: int = Field(
        DEFAULT_INTERVAL_MS,
        gt=0,
        description="Delay between automatic slide advances",
    )
    autoplay_enabled: bool = Field(
        True,
        description="Whether the carousel rotates on its own at all",
    )

    model_config = ConfigDict(frozen=True)


class ModalConfig(BaseModel):
    """Settings for a blocking modal dialog."""

    dismiss_on_backdrop: bool = Field(
        True,
        description="Close the dialog when the backdrop is activated",
    )
    initial_focus: Literal["first", "surface"] = Field(
        "first",
        description="Focus the first focusable descendant or the surface itself",
    )

    model_config = ConfigDict(frozen=True)


class WidgetSettings(BaseModel):
    """Settings for all three widget controllers."""

    paged_list: PagedListConfig = Field(default_factory=PagedListConfig)
    carousel: CarouselConfig = Field(default_factory=CarouselConfig)
    modal: ModalConfig = Field(default_factory=ModalConfig)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "WidgetSettings":
        """Load settings from environment variables.

        Recognized variables: SHELF_PAGE_SIZE, CAROUSEL_INTERVAL_MS,
        CAROUSEL_AUTOPLAY, MODAL_BACKDROP_DISMISS, MODAL_INITIAL_FOCUS.
        Unset variables keep their defaults.

        Args:
            env: Mapping to read from. Defaults to os.environ.

        Returns:
            Validated WidgetSettings.

        Raises:
            ConfigurationError: If a variable holds an invalid value.
        """
        if env is None:
            env = environ

        paged_list: dict[str, object] = {}
        carousel: dict[str, object] = {}
        modal: dict[str, object] = {}

        if "SHELF_PAGE_SIZE" in env:
            paged_list["page_size"] = env["SHELF_PAGE_SIZE"]
        if "CAROUSEL_INTERVAL_MS" in env:
            carousel["interval_ms"] = env["CAROUSEL_INTERVAL_MS"]
        if "CAROUSEL_AUTOPLAY" in env:
            carousel["autoplay_enabled"] = env["CAROUSEL_AUTOPLAY"].strip()
        if "MODAL_BACKDROP_DISMISS" in env:
            modal["dismiss_on_backdrop"] = env["MODAL_BACKDROP_DISMISS"].strip()
        if "MODAL_INITIAL_FOCUS" in env:
            modal["initial_focus"] = env["MODAL_INITIAL_FOCUS"].lower()

        try:
            return cls(
                paged_list=PagedListConfig.model_validate(paged_list),
                carousel=CarouselConfig.model_validate(carousel),
                modal=ModalConfig.model_validate(modal),
            )
        except ValidationError as ex:
            first = ex.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or None
            raise ConfigurationError(
                f"Invalid widget settings: {first['msg']}", field=field
            ) from ex
