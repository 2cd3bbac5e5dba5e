"""
Document files for nestmap.

Reads JSON and YAML files into NestedMap instances and writes them back.
"""

from nestmap.documents.loader import DocumentError, dump_document, load_document

__all__ = ["DocumentError", "dump_document", "load_document"]
