from infrastructure.hosts_source import FileHostsSource, PrivilegedHostsSource, build_source
from infrastructure.document_io import document_from_text, render_text, load_document, save_document

__all__ = [
    "FileHostsSource",
    "PrivilegedHostsSource",
    "build_source",
    "document_from_text",
    "render_text",
    "load_document",
    "save_document",
]
