"""Host rendering surface for the indicator strip."""

import shutil

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Callable, Optional

from .types import ContainerKind, IndicatorState
from .utils.colors import colorize, strip_colors

ClickHandler = Callable[[], None]
LongClickHandler = Callable[[], bool]

SCROLL_MARKER = "»"


class IndicatorView:
    """Rendered handle for one indicator."""

    def __init__(self) -> None:
        self.text = ""
        self.state = IndicatorState.DISABLED
        self.color: Optional[str] = None
        self.width = 0
        self._on_click: Optional[ClickHandler] = None
        self._on_long_click: Optional[LongClickHandler] = None

    def set_content(
        self, text: str, state: IndicatorState, color: Optional[str] = None
    ) -> None:
        self.text = text
        self.state = state
        self.color = color

    def set_on_click(self, handler: Optional[ClickHandler]) -> None:
        self._on_click = handler

    def set_on_long_click(self, handler: Optional[LongClickHandler]) -> None:
        self._on_long_click = handler

    def click(self) -> None:
        if self._on_click is not None:
            self._on_click()

    def long_click(self) -> bool:
        if self._on_long_click is None:
            return False
        return self._on_long_click()


class Container:
    """Row of indicator views, fixed or horizontally scrollable."""

    def __init__(self, kind: ContainerKind, item_width: int) -> None:
        self.kind = kind
        self.item_width = item_width
        self.children: list[IndicatorView] = []

    @property
    def fading_edge_length(self) -> int:
        if self.kind is ContainerKind.SCROLLABLE:
            return self.item_width
        return 0


class WidgetHost(ABC):
    """Rendering collaborator the widget controller draws into."""

    @abstractmethod
    def inflate_indicator_view(self) -> IndicatorView:
        """Create a detached view for one indicator."""

    @abstractmethod
    def create_container(self, kind: ContainerKind, item_width: int) -> Container:
        """Create an empty row container."""

    @abstractmethod
    def attach(self, container: Container, children: Iterable[IndicatorView]) -> None:
        """Fill a container with views and make it the widget's content."""

    @abstractmethod
    def clear(self) -> None:
        """Remove the current content."""

    @abstractmethod
    def set_visible(self, visible: bool) -> None:
        pass

    @abstractmethod
    def is_visible(self) -> bool:
        pass

    @abstractmethod
    def display_width(self) -> int:
        """Current display width in pixels."""


class TerminalHost(WidgetHost):
    """Renders the strip as a line of terminal text, one column per pixel."""

    def __init__(self, width: Optional[int] = None) -> None:
        self._width = width
        self._visible = True
        self._container: Optional[Container] = None

    @property
    def container(self) -> Optional[Container]:
        return self._container

    def inflate_indicator_view(self) -> IndicatorView:
        return IndicatorView()

    def create_container(self, kind: ContainerKind, item_width: int) -> Container:
        return Container(kind, item_width)

    def attach(self, container: Container, children: Iterable[IndicatorView]) -> None:
        container.children = list(children)
        for child in container.children:
            child.width = container.item_width
        self._container = container

    def clear(self) -> None:
        self._container = None

    def set_visible(self, visible: bool) -> None:
        self._visible = visible

    def is_visible(self) -> bool:
        return self._visible

    def display_width(self) -> int:
        if self._width is not None:
            return self._width
        return shutil.get_terminal_size().columns

    def set_display_width(self, width: int) -> None:
        """Change the reported width, as a rotation would."""
        self._width = width

    def render(self) -> str:
        """Render the strip with ANSI colors, or "" when hidden or empty."""
        if not self._visible or self._container is None:
            return ""

        container = self._container
        children = container.children
        overflow = False
        if container.kind is ContainerKind.SCROLLABLE and container.item_width > 0:
            fits = max(1, self.display_width() // container.item_width)
            overflow = len(children) > fits
            children = children[:fits]

        cells = [_render_cell(view, container.item_width) for view in children]
        line = "".join(cells)
        if overflow:
            line += colorize(SCROLL_MARKER, "dim")
        return line

    def render_plain(self) -> str:
        return strip_colors(self.render())


def _render_cell(view: IndicatorView, width: int) -> str:
    text = view.text
    if width > 0:
        text = text[:width].center(width)

    if view.state is IndicatorState.ENABLED:
        return colorize(text, view.color or "white", bold=True)
    if view.state is IndicatorState.INTERMEDIATE:
        return colorize(text, "yellow")
    return colorize(text, "dim")
