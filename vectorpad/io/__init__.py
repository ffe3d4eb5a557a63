"""
VectorPad I/O Module

Handles project persistence and export.
"""

from .project_io import save_project, load_project, serialize, deserialize
from .export import export_json, export_html, export_svg

__all__ = [
    'save_project', 'load_project', 'serialize', 'deserialize',
    'export_json', 'export_html', 'export_svg',
]
