"""Element store standing in for the page's DOM."""
from typing import Dict, Optional

from dashboard.services.rendering import Arc


class Document:
    """
    Holds rendered content keyed by element id.

    Text and HTML share one namespace, as innerHTML/textContent do on a page.
    Canvas ids hold the last Arc drawn on them.
    """

    def __init__(self):
        self.elements: Dict[str, str] = {}
        self.canvases: Dict[str, Arc] = {}
        self.attributes: Dict[str, Dict[str, str]] = {}

    def set_html(self, element_id: str, html: str) -> None:
        self.elements[element_id] = html

    def set_text(self, element_id: str, text) -> None:
        self.elements[element_id] = str(text)

    def set_attribute(self, element_id: str, name: str, value: str) -> None:
        self.attributes.setdefault(element_id, {})[name] = value

    def draw_arc(self, canvas_id: str, arc: Arc) -> None:
        """Clear a canvas and draw a single arc on it."""
        self.canvases[canvas_id] = arc

    def get(self, element_id: str) -> Optional[str]:
        return self.elements.get(element_id)

    def attribute(self, element_id: str, name: str) -> Optional[str]:
        return self.attributes.get(element_id, {}).get(name)
