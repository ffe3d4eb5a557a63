"""
Export for VectorPad

Produces static documents from the active page, always in paint order:
- JSON (elements plus metadata)
- HTML with absolutely positioned divs
- SVG
"""

import html
import json
import logging
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional

from ..core.config import EditorConfig
from ..core.document import Document
from ..core.elements import Element, ElementType, Path
from .project_io import element_to_dict

logger = logging.getLogger(__name__)

TOOL_NAME = "VectorPad"


def export_elements(document: Document) -> List[Element]:
    """Read-only view of the active page in paint order."""
    return document.paint_order()


def export_json(document: Document, filepath: Optional[str] = None) -> str:
    """
    Export the active page as JSON.

    Returns:
        The JSON text, also written to filepath when given
    """
    data: Dict[str, Any] = {
        'elements': [element_to_dict(e) for e in export_elements(document)],
        'metadata': {
            'created': datetime.now(timezone.utc).isoformat(),
            'tool': TOOL_NAME,
        },
    }
    text = json.dumps(data, indent=2)
    if filepath:
        _write(filepath, text)
    return text


def _element_style(element: Element) -> str:
    style = [
        f"left: {element.x:g}px",
        f"top: {element.y:g}px",
        f"width: {element.width:g}px",
        f"height: {element.height:g}px",
        f"background-color: {element.fill_color}",
        f"transform: rotate({element.rotation:g}deg)",
        f"z-index: {element.z_index}",
    ]
    if element.element_type is ElementType.CIRCLE:
        style.append("border-radius: 50%")
    elif element.element_type is ElementType.TEXT:
        style.append(f"color: {element.fill_color}")
        style.append("background: transparent")
        style.append(f"border: 1px solid {element.fill_color}")
    elif element.element_type is ElementType.TRIANGLE:
        style.append("clip-path: polygon(50% 0%, 0% 100%, 100% 100%)")
    elif element.element_type is ElementType.STAR:
        style.append("clip-path: polygon(50% 0%, 61% 35%, 98% 35%, 68% 57%, "
                     "79% 91%, 50% 70%, 21% 91%, 32% 57%, 2% 35%, 39% 35%)")
    elif element.element_type is ElementType.PATH:
        pass
    elif element.border_width:
        style.append(f"border: {element.border_width:g}px solid {element.border_color}")
    return "; ".join(style) + ";"


def _path_svg_markup(path: Path) -> str:
    """Inline SVG for a freehand path, in the div's own coordinates."""
    points = " ".join(f"{p.x - path.x:g},{p.y - path.y:g}" for p in path.points)
    return (f'<svg width="{path.width:g}" height="{path.height:g}">'
            f'<polyline points="{points}" fill="none" '
            f'stroke="{html.escape(path.border_color)}" '
            f'stroke-width="{path.border_width:g}" '
            f'stroke-linecap="round" stroke-linejoin="round"/></svg>')


def export_html(document: Document, filepath: Optional[str] = None,
                config: Optional[EditorConfig] = None) -> str:
    """
    Export the active page as a standalone HTML page.

    Returns:
        The HTML text, also written to filepath when given
    """
    config = config or EditorConfig()
    lines = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '    <meta charset="UTF-8">',
        '    <meta name="viewport" content="width=device-width, initial-scale=1.0">',
        "    <title>Exported Design</title>",
        "    <style>",
        "        body { margin: 0; padding: 20px; font-family: system-ui, sans-serif; }",
        f"        .canvas {{ position: relative; width: {config.canvas_width:g}px; "
        f"height: {config.canvas_height:g}px; background: white; border: 1px solid #ccc; }}",
        "        .element { position: absolute; display: flex; align-items: center; "
        "justify-content: center; box-sizing: border-box; }",
        "    </style>",
        "</head>",
        "<body>",
        '    <div class="canvas">',
    ]

    for element in export_elements(document):
        if isinstance(element, Path):
            content = _path_svg_markup(element)
        else:
            content = html.escape(element.text_content) \
                if element.element_type is ElementType.TEXT else ""
        style = _element_style(element)
        lines.append(f'        <div class="element" id="{html.escape(element.id)}" '
                     f'style="{html.escape(style)}">{content}</div>')

    lines += ["    </div>", "</body>", "</html>", ""]
    text = "\n".join(lines)
    if filepath:
        _write(filepath, text)
    return text


def export_svg(document: Document, filepath: str,
               config: Optional[EditorConfig] = None) -> None:
    """Export the active page to SVG format."""
    config = config or EditorConfig()
    svg = ET.Element('svg')
    svg.set('xmlns', 'http://www.w3.org/2000/svg')
    svg.set('width', f'{config.canvas_width:g}')
    svg.set('height', f'{config.canvas_height:g}')
    svg.set('viewBox', f'0 0 {config.canvas_width:g} {config.canvas_height:g}')

    for element in export_elements(document):
        outline = element.local_outline()
        if not outline:
            continue

        d = f'M {outline[0].x:g},{outline[0].y:g}'
        for point in outline[1:]:
            d += f' L {point.x:g},{point.y:g}'

        path_elem = ET.SubElement(svg, 'path')
        path_elem.set('id', element.id)
        open_outline = element.element_type in (ElementType.PATH, ElementType.LINE)
        if not open_outline:
            d += ' Z'
        path_elem.set('d', d)

        if element.element_type is ElementType.LINE:
            path_elem.set('fill', 'none')
            path_elem.set('stroke', element.fill_color)
            path_elem.set('stroke-width', f'{max(element.height, 1.0):g}')
        elif element.element_type is ElementType.TEXT:
            # Text boxes are outlined, not filled
            path_elem.set('fill', 'none')
            path_elem.set('stroke', element.fill_color)
            path_elem.set('stroke-width', '1')
        else:
            path_elem.set('fill', 'none' if open_outline else element.fill_color)
            if element.border_width:
                path_elem.set('stroke', element.border_color)
                path_elem.set('stroke-width', f'{element.border_width:g}')

        if element.rotation:
            center = element.center
            path_elem.set('transform',
                          f'rotate({element.rotation:g} {center.x:g} {center.y:g})')

        if element.element_type is ElementType.TEXT and element.text_content:
            text_elem = ET.SubElement(svg, 'text')
            text_elem.set('x', f'{element.center.x:g}')
            text_elem.set('y', f'{element.center.y:g}')
            text_elem.set('fill', element.fill_color)
            text_elem.set('text-anchor', 'middle')
            text_elem.set('dominant-baseline', 'middle')
            if element.rotation:
                text_elem.set('transform', path_elem.get('transform'))
            text_elem.text = element.text_content

    tree = ET.ElementTree(svg)
    ET.indent(tree, space="  ")
    tree.write(filepath, encoding='unicode', xml_declaration=True)
    logger.info("Exported SVG to %s", filepath)


def _write(filepath: str, text: str) -> None:
    with open(filepath, 'w', encoding='utf-8') as f:
        f.write(text)
    logger.info("Exported %s", filepath)
