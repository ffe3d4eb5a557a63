"""
Project File I/O for VectorPad

Handles saving and loading project files. Uses JSON with the field names of
the browser editor's saved documents (backgroundColor, zIndex, ...), so
existing saves keep loading.
"""

import json
import logging
from datetime import datetime
from typing import Dict, Any, List, Optional

from ..core.document import Document
from ..core.elements import (
    Element, Path, MIN_PATH_POINTS, element_class_for, element_number
)
from ..core.geometry import Point, normalize_angle
from ..core.page import Page

logger = logging.getLogger(__name__)

FORMAT_VERSION = "1.0"


def save_project(document: Document, filepath: str) -> bool:
    """
    Save a document to a project file.

    Args:
        document: The document to save
        filepath: Path to save the file

    Returns:
        True if successful, False otherwise
    """
    try:
        doc_dict = serialize(document)
        doc_dict['version'] = FORMAT_VERSION
        doc_dict['saved_at'] = datetime.now().isoformat()

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(doc_dict, f, indent=2, ensure_ascii=False)

        logger.info("Saved project to %s", filepath)
        return True
    except (OSError, TypeError, ValueError):
        logger.exception("Error saving project to %s", filepath)
        return False


def load_project(filepath: str) -> Optional[Document]:
    """
    Load a document from a project file.

    A missing or corrupt file means there is no prior document.

    Returns:
        Document object if successful, None otherwise
    """
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            doc_dict = json.load(f)
    except FileNotFoundError:
        logger.info("No project at %s", filepath)
        return None
    except (OSError, ValueError):
        logger.exception("Error loading project from %s", filepath)
        return None

    return deserialize(doc_dict)


def serialize(document: Document) -> Dict[str, Any]:
    """
    Convert a document to a JSON-ready dictionary.

    The live buffer is flushed into the active page first.
    """
    document.flush_live_buffer()
    return {
        'pages': [page_to_dict(page) for page in document.pages],
        'currentPageIndex': document.active_page_index,
    }


def deserialize(data: Any) -> Optional[Document]:
    """
    Build a document from a dictionary produced by serialize().

    Data without a 'pages' list is read as a single legacy page
    ({elements, elementCounter}). Unknown element types and paths with
    fewer than two points are skipped.

    Returns:
        Document, or None if data is not a usable document
    """
    if not isinstance(data, dict):
        logger.warning("Ignoring stored document of type %s", type(data).__name__)
        return None

    try:
        if isinstance(data.get('pages'), list):
            pages = [dict_to_page(p, i) for i, p in enumerate(data['pages'])
                     if isinstance(p, dict)]
            index = data.get('currentPageIndex', data.get('activePageIndex', 0))
        else:
            pages = [dict_to_page({
                'id': 'page_1',
                'name': 'Page 1',
                'elements': data.get('elements') or [],
                'elementCounter': data.get('elementCounter', 0),
            }, 0)]
            index = 0

        try:
            index = int(index or 0)
        except (TypeError, ValueError):
            index = 0
        if not 0 <= index < max(len(pages), 1):
            index = 0

        page_counter = max([_page_number(p.id) for p in pages] + [len(pages)])
        z_values = [e.z_index for p in pages for e in p.elements]
        return Document(
            pages=pages,
            active_page_index=index,
            page_counter=page_counter,
            z_index_counter=max(z_values) + 1 if z_values else 0,
        )
    except (KeyError, TypeError, ValueError, AttributeError):
        logger.exception("Stored document is corrupt")
        return None


def page_to_dict(page: Page) -> Dict[str, Any]:
    """Convert Page to dictionary."""
    return {
        'id': page.id,
        'name': page.name,
        'elements': [element_to_dict(e) for e in page.elements],
        'elementCounter': page.element_counter,
    }


def dict_to_page(page_dict: Dict[str, Any], index: int = 0) -> Page:
    """Convert dictionary to Page."""
    elements: List[Element] = []
    for element_dict in page_dict.get('elements') or []:
        element = dict_to_element(element_dict)
        if element is not None:
            elements.append(element)

    # Keep the counter ahead of every stored id
    counter = int(page_dict.get('elementCounter') or 0)
    counter = max([counter] + [element_number(e.id) for e in elements])

    return Page(
        id=str(page_dict.get('id') or f"page_{index + 1}"),
        name=str(page_dict.get('name') or f"Page {index + 1}"),
        elements=elements,
        element_counter=counter,
    )


def element_to_dict(element: Element) -> Dict[str, Any]:
    """Convert Element to dictionary."""
    element_dict = {
        'id': element.id,
        'type': element.type_name,
        'x': element.x,
        'y': element.y,
        'width': element.width,
        'height': element.height,
        'rotation': element.rotation,
        'backgroundColor': element.fill_color,
        'borderColor': element.border_color,
        'borderWidth': element.border_width,
        'textContent': element.text_content,
        'zIndex': element.z_index,
    }
    if isinstance(element, Path):
        element_dict['points'] = [{'x': p.x, 'y': p.y} for p in element.points]
    return element_dict


def dict_to_element(element_dict: Any) -> Optional[Element]:
    """
    Convert dictionary to Element.

    Returns:
        The element, or None for unknown types and degenerate paths
    """
    if not isinstance(element_dict, dict):
        return None

    element_type = element_dict.get('type')
    try:
        element_cls = element_class_for(element_type)
    except ValueError:
        logger.warning("Skipping element of unknown type: %s", element_type)
        return None

    element_id = str(element_dict.get('id', ''))
    if element_cls is Path:
        points = [Point(float(p['x']), float(p['y']))
                  for p in element_dict.get('points') or []]
        if len(points) < MIN_PATH_POINTS:
            logger.warning("Skipping path %s with %d point(s)", element_id, len(points))
            return None
        element = Path(element_id, points)
    else:
        element = element_cls(element_id)

    element.x = float(element_dict.get('x', 0.0))
    element.y = float(element_dict.get('y', 0.0))
    element.width = max(0.0, float(element_dict.get('width', 0.0)))
    element.height = max(0.0, float(element_dict.get('height', 0.0)))
    element.rotation = normalize_angle(float(element_dict.get('rotation', 0.0)))
    if 'backgroundColor' in element_dict:
        element.fill_color = element_dict['backgroundColor']
    if 'borderColor' in element_dict:
        element.border_color = element_dict['borderColor']
    element.border_width = max(0.0, float(element_dict.get('borderWidth', element.border_width)))
    if 'textContent' in element_dict:
        element.text_content = str(element_dict['textContent'])
    element.z_index = int(element_dict.get('zIndex', 0))
    return element


def _page_number(page_id: str) -> int:
    try:
        return int(page_id.rsplit('_', 1)[-1])
    except ValueError:
        return 0
