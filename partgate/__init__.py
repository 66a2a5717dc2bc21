"""partgate — an HTTP gateway in front of a SynBioHub part registry.

The package provides:
- Identity resolution for the two credential shapes the canvas sends
- Vocabulary lookup from role/type names to ontology identifiers
- Query building and search dispatch over the registry's three search styles
- Document fetch/upload through the graph-document converter
"""

__version__ = "0.1.0"
