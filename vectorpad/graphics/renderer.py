"""
Rendering collaborator interface for VectorPad.

The editing engine never paints. It tells a Renderer which elements appeared,
changed or disappeared; the renderer owns every visual artifact, including
any per-point handles of freehand paths (keyed by path id and point index).
"""

from abc import ABC, abstractmethod

from ..core.elements import Element


class Renderer(ABC):
    """Receives display updates from the editing engine."""

    @abstractmethod
    def render_element(self, element: Element) -> None:
        """Create the visual representation of a new element."""
        pass

    @abstractmethod
    def update_element_display(self, element: Element) -> None:
        """Refresh the representation of an element that changed."""
        pass

    @abstractmethod
    def remove_element(self, element_id: str) -> None:
        """Drop the representation of an element."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Drop every representation."""
        pass


class NullRenderer(Renderer):
    """Renderer that draws nothing, used when the engine runs headless."""

    def render_element(self, element: Element) -> None:
        pass

    def update_element_display(self, element: Element) -> None:
        pass

    def remove_element(self, element_id: str) -> None:
        pass

    def clear(self) -> None:
        pass
