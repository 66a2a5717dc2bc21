"""Document conversion between the canvas graph format and SBOL."""

from partgate.convert.converter import GRAPH_MEDIA_TYPE, DocumentConverter, GraphConverter

__all__ = ["GRAPH_MEDIA_TYPE", "DocumentConverter", "GraphConverter"]
