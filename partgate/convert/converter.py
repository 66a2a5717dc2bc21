"""Graph document <-> SBOL RDF/XML conversion.

A graph document is an ``mxGraphModel`` holding one vertex cell per
design of the SBOL document, with the SBOL RDF/XML embedded beside the
cell tree. Design URIs are carried through untouched, so a document
fetched, edited and submitted back keeps its identity.

The SBOL side is read as RDF, so a design is found by its ``rdf:type``
whether the document writes it as a typed element or as an
``rdf:Description``.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Protocol
from xml.sax import SAXParseException

from rdflib import Graph, Literal, Namespace, URIRef
from rdflib.exceptions import ParserError
from rdflib.namespace import DCTERMS, RDF

from partgate.errors import ConversionError

GRAPH_MEDIA_TYPE = "application/xml"

RDF_NS = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
SBOL_NS = "http://sbols.org/v2#"
DCTERMS_NS = "http://purl.org/dc/terms/"
PROV_NS = "http://www.w3.org/ns/prov#"

SBOL = Namespace(SBOL_NS)
PROV = Namespace(PROV_NS)

RDF_TAG = f"{{{RDF_NS}}}RDF"

# Top-level SBOL classes drawn as cells, with their canvas style
DESIGN_STYLES = {
    SBOL.ComponentDefinition: "circuitContainer",
    SBOL.ModuleDefinition: "moduleViewCell",
}

for _prefix, _uri in (("rdf", RDF_NS), ("sbol", SBOL_NS), ("dcterms", DCTERMS_NS), ("prov", PROV_NS)):
    ET.register_namespace(_prefix, _uri)


class DocumentConverter(Protocol):
    """What the gateway needs from a document converter."""

    def to_graph(self, sbol: bytes) -> bytes: ...

    def to_sbol(self, graph: bytes, name: str) -> bytes: ...


def _parse(data: bytes, what: str) -> ET.Element:
    try:
        return ET.fromstring(data)
    except ET.ParseError as exc:
        raise ConversionError(f"Malformed {what}: {exc}") from exc


def _load_rdf(rdf: ET.Element) -> Graph:
    graph = Graph()
    for prefix, uri in (("sbol", SBOL), ("dcterms", DCTERMS), ("prov", PROV)):
        graph.bind(prefix, uri)
    try:
        graph.parse(data=ET.tostring(rdf, encoding="unicode"), format="xml")
    except (SAXParseException, ParserError) as exc:
        raise ConversionError(f"Malformed SBOL content: {exc}") from exc
    return graph


def _designs(graph: Graph) -> list[tuple[URIRef, URIRef]]:
    """Return ``(design, class)`` pairs, top-level designs first.

    A design used as the definition of another design's subcomponent or
    submodule sorts after the designs that are not. Ties sort by URI.
    """
    used = set(graph.objects(None, SBOL.definition))
    designs = [
        (subject, sbol_class)
        for sbol_class in DESIGN_STYLES
        for subject in graph.subjects(RDF.type, sbol_class)
        if isinstance(subject, URIRef)
    ]
    return sorted(designs, key=lambda pair: (pair[0] in used, str(pair[0])))


class GraphConverter:
    """Converts between SBOL RDF/XML and the canvas graph document."""

    def to_graph(self, sbol: bytes) -> bytes:
        rdf = _parse(sbol, "SBOL document")
        if rdf.tag != RDF_TAG:
            raise ConversionError("SBOL document has no rdf:RDF root")
        graph = _load_rdf(rdf)

        model = ET.Element("mxGraphModel")
        root = ET.SubElement(model, "root")
        ET.SubElement(root, "mxCell", id="0")
        ET.SubElement(root, "mxCell", id="1", parent="0")

        for index, (design, sbol_class) in enumerate(_designs(graph), start=2):
            uri = str(design)
            display_id = graph.value(design, SBOL.displayId)
            ET.SubElement(
                root,
                "mxCell",
                id=str(index),
                parent="1",
                vertex="1",
                value=str(display_id) if display_id else uri.rstrip("/").rsplit("/", 1)[-1],
                style=DESIGN_STYLES[sbol_class],
                sbolUri=uri,
            )

        model.append(rdf)
        return ET.tostring(model, encoding="utf-8", xml_declaration=True)

    def to_sbol(self, graph: bytes, name: str) -> bytes:
        """Extract the SBOL document and title its root design *name*.

        The root design is the one drawn by the first vertex cell.
        """
        model = _parse(graph, "graph document")
        if model.tag != "mxGraphModel":
            raise ConversionError("Graph document has no mxGraphModel root")

        rdf = model.find(RDF_TAG)
        if rdf is None:
            raise ConversionError("Graph document carries no SBOL content")
        document = _load_rdf(rdf)

        cells = [cell for cell in model.iter("mxCell") if cell.get("sbolUri")]
        if cells and name:
            root_design = URIRef(cells[0].get("sbolUri"))
            if any(design == root_design for design, _ in _designs(document)):
                document.set((root_design, DCTERMS.title, Literal(name)))

        return document.serialize(format="xml", encoding="utf-8")
