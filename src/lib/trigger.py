"""
Render trigger: binds editable regions to their previews

A region pairs a source (returns the authoritative raw text, e.g. the editor
textarea) with a sink (receives rendered markup, e.g. the preview element).
On page load every region is rendered; on every input-change event the
changed region is rendered again, in full.

Passes run synchronously and to completion, so the sink always holds the
markup of the most recently read raw text. The sink is write-only: markup is
never read back and re-rendered.

Example:
    >>> pane = {"raw": "# Hi", "preview": ""}
    >>> trigger = RenderTrigger()
    >>> trigger.region_add(
    ...     "article",
    ...     source=lambda: pane["raw"],
    ...     sink=lambda markup: pane.__setitem__("preview", markup),
    ... )
    >>> trigger.page_load()
    >>> pane["preview"]
    '<h1>Hi</h1>'
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .log import LOG
from .renderer import Renderer


@dataclass(frozen=True)
class Region:
    """
    A designated raw-text region and the preview it feeds

    Attributes:
        name: Region identifier (e.g., "article-content")
        source: Returns the current raw text of the region
        sink: Receives the rendered markup of the region
    """
    name: str
    source: Callable[[], str]
    sink: Callable[[str], None]


class RenderTrigger:
    """
    Re-renders regions on page load and on input change

    Attributes:
        regions: Bound regions by name, in binding order
        renderer: Renderer used for every pass
        passes: Number of completed render passes
    """

    def __init__(self, renderer: Optional[Renderer] = None) -> None:
        self.regions: Dict[str, Region] = {}
        self.renderer = renderer or Renderer()
        self.passes = 0

    def region_add(
        self, name: str, source: Callable[[], str], sink: Callable[[str], None]
    ) -> Region:
        """
        Bind a region

        Binding a name twice replaces the earlier region.

        Returns:
            The bound Region
        """
        region = Region(name=name, source=source, sink=sink)
        self.regions[name] = region
        return region

    def page_load(self) -> None:
        """Render every bound region"""
        LOG(f"Page load: rendering {len(self.regions)} regions", level=2)
        for region in self.regions.values():
            self.region_refresh(region)

    def input_change(self, name: str) -> str:
        """
        Re-render the region whose raw text changed

        Args:
            name: Name of the changed region

        Returns:
            The markup written to the region's sink

        Raises:
            KeyError: If no region with that name is bound
        """
        return self.region_refresh(self.regions[name])

    def region_refresh(self, region: Region) -> str:
        """Read the raw source, render it in full and write the sink"""
        raw = region.source()
        markup = self.renderer.render(raw)
        region.sink(markup)
        self.passes += 1
        LOG(f"Rendered region '{region.name}' ({len(raw)} chars, pass {self.passes})", level=3)
        return markup
