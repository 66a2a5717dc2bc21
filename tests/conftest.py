"""Shared fixtures: an in-memory SynBioHub served through httpx.MockTransport."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from web.backend.app.dependencies import get_transport
from web.backend.app.main import create_app

SERVER = "https://synbiohub.example.org"
TOKEN = "tok-123"
PASSWORD = "secret"

PRIVATE_COLLECTION = f"{SERVER}/user/alice/designs/designs_collection/1"
PUBLIC_COLLECTION = f"{SERVER}/public/igem/igem_collection/1"
PART_URI = f"{SERVER}/user/alice/designs/pTet_circuit/1"

SBOL_DOCUMENT = f"""<?xml version="1.0" encoding="utf-8"?>
<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
         xmlns:sbol="http://sbols.org/v2#"
         xmlns:dcterms="http://purl.org/dc/terms/">
  <sbol:ComponentDefinition rdf:about="{PART_URI}">
    <sbol:displayId>pTet_circuit</sbol:displayId>
    <dcterms:title>pTet circuit</dcterms:title>
    <sbol:type rdf:resource="http://www.biopax.org/release/biopax-level3.owl#DnaRegion"/>
    <sbol:role rdf:resource="http://identifiers.org/so/SO:0000804"/>
    <sbol:component>
      <sbol:Component rdf:about="{PART_URI}/pTet_component/1">
        <sbol:displayId>pTet_component</sbol:displayId>
        <sbol:access rdf:resource="http://sbols.org/v2#public"/>
        <sbol:definition rdf:resource="{SERVER}/user/alice/designs/pTet/1"/>
      </sbol:Component>
    </sbol:component>
  </sbol:ComponentDefinition>
  <sbol:ComponentDefinition rdf:about="{SERVER}/user/alice/designs/pTet/1">
    <sbol:displayId>pTet</sbol:displayId>
    <sbol:type rdf:resource="http://www.biopax.org/release/biopax-level3.owl#DnaRegion"/>
    <sbol:role rdf:resource="http://identifiers.org/so/SO:0000167"/>
  </sbol:ComponentDefinition>
</rdf:RDF>
""".encode("utf-8")


def _record(uri: str, name: str) -> dict:
    return {
        "uri": uri,
        "name": name,
        "displayId": uri.rstrip("/").split("/")[-2],
        "version": "1",
        "description": f"{name} description",
    }


class FakeRegistry:
    """Minimal SynBioHub that records every request it receives."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.documents: dict[str, bytes] = {}
        self.submissions: list[dict] = []
        self.root_collections = [
            _record(PRIVATE_COLLECTION, "Designs"),
            _record(PUBLIC_COLLECTION, "iGEM Parts"),
        ]
        self.sub_collections = [_record(f"{SERVER}/user/alice/designs/sub_collection/1", "Sub")]
        self.search_results = [
            _record(f"{SERVER}/user/alice/designs/b/1", "B part"),
            _record(f"{SERVER}/user/alice/designs/a/1", "A part"),
        ]
        self.fail_with: int | None = None
        self.transport = httpx.MockTransport(self.handle)

    @property
    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if self.fail_with is not None:
            return httpx.Response(self.fail_with, text="registry exploded")

        if path == "/instances/":
            return httpx.Response(
                200,
                json=[
                    {"instanceUrl": "https://synbiohub.org/", "uriPrefix": "https://synbiohub.org/", "name": "SynBioHub"},
                    {"instanceUrl": SERVER, "uriPrefix": SERVER, "name": "Example"},
                ],
            )

        if path == "/login" and request.method == "POST":
            form = dict(httpx.QueryParams(request.content.decode()))
            if form.get("password") == PASSWORD:
                return httpx.Response(200, text=TOKEN)
            return httpx.Response(401, text="Your password was not recognized.")

        if path == "/rootCollections":
            return httpx.Response(200, json=self.root_collections)

        if path.endswith("/subCollections"):
            return httpx.Response(200, json=self.sub_collections)

        if path.startswith("/search/"):
            return httpx.Response(200, json=self.search_results)

        if path.endswith("/sbol") or path.endswith("/sbolnr"):
            uri = str(request.url).rsplit("/", 1)[0]
            return httpx.Response(200, content=self.documents.get(uri, SBOL_DOCUMENT))

        if path == "/submit" and request.method == "POST":
            if request.headers.get("X-authorization") != TOKEN:
                return httpx.Response(401, text="Not logged in")
            body = request.content
            start = body.index(b"<?xml")
            end = body.index(b"\r\n--", start)
            document = body[start:end]
            self.submissions.append(
                {
                    "document": document,
                    "rootCollections": PRIVATE_COLLECTION.encode() in body,
                    "overwrite": b'name="overwrite_merge"\r\n\r\n3' in body,
                }
            )
            self.documents[PART_URI] = document
            return httpx.Response(200, text="Submission successful")

        return httpx.Response(404, text=json.dumps({"path": path}))


@pytest.fixture
def registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture
def client(registry: FakeRegistry, monkeypatch) -> TestClient:
    """TestClient whose outbound registry calls go to the fake registry."""
    monkeypatch.setenv("PARTGATE_WOR_URL", "https://wor.example.org/instances/")
    app = create_app()
    app.dependency_overrides[get_transport] = lambda: registry.transport
    return TestClient(app)
