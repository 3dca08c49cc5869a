"""HTTP-level tests for configuration and extraction routes."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from tests.fixtures import build_multiverse_store, minimal_mapping
from triplemap.config import Settings
from triplemap.errors import ConfigurationInvalidError, LoadFailedError
from triplemap.extraction.extractor_interface import ExtractorInterface
from triplemap.main import create_app
from triplemap.mapping.registry import ConfigurationRegistry
from triplemap.services.extraction import ExtractionService


class _FixtureLoader:
    def __init__(self) -> None:
        self.calls: list[str] = []

    async def load(self, source: str):
        self.calls.append(source)
        if source.endswith("missing.ttl"):
            raise LoadFailedError(source, "[Errno 2] No such file or directory: root:x:0:0")
        if source.endswith("empty.ttl"):
            return None
        return build_multiverse_store()


class _RejectingExtractor(ExtractorInterface):
    def extract(self, store, config):
        raise ConfigurationInvalidError(["Transform 'nope' is not registered"])


class ApiRouteTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name).resolve()
        self.registry = ConfigurationRegistry()
        self.loader = _FixtureLoader()
        self.service = ExtractionService(self.registry, self.loader)
        self.settings = Settings(
            source_root=str(self.root),
            default_source="fixture.ttl",
            allowed_sources=["https://data.example.org/universe.ttl"],
            active_configuration_id="default",
        )
        self.client = TestClient(
            create_app(settings=self.settings, registry=self.registry, extraction_service=self.service)
        )

    def located(self, name: str) -> str:
        return str(self.root / name)

    def test_health(self) -> None:
        response = self.client.get("/health")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok"})

    def test_list_and_get_configurations(self) -> None:
        response = self.client.get("/configurations")

        self.assertEqual(response.status_code, 200)
        ids = [item["id"] for item in response.json()["data"]]
        self.assertEqual(ids, ["default", "multiverse", "orgchart"])

        detail = self.client.get("/configurations/default").json()["data"]
        self.assertTrue(detail["is_active"])
        self.assertEqual(detail["entity_types"], ["character", "movie"])
        self.assertEqual(self.client.get("/configurations/missing").status_code, 404)

    def test_put_configuration_validates_and_registers(self) -> None:
        payload = json.loads(minimal_mapping().model_dump_json())

        response = self.client.put("/configurations/test", json=payload)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["id"], "test")
        self.assertIn("test", self.registry)

    def test_put_invalid_configuration_returns_violations(self) -> None:
        payload = json.loads(minimal_mapping().model_dump_json())
        payload["entity_types"] = []

        response = self.client.put("/configurations/bad", json=payload)

        self.assertEqual(response.status_code, 422)
        self.assertIn(
            "At least one entity type mapping is required",
            response.json()["detail"]["violations"],
        )
        self.assertNotIn("bad", self.registry)

    def test_export_clone_and_delete(self) -> None:
        exported = self.client.get("/configurations/orgchart/export")
        self.assertEqual(exported.status_code, 200)
        self.assertEqual(json.loads(exported.json()["data"]["text"])["namespaces"]["foaf"], "http://xmlns.com/foaf/0.1/")

        cloned = self.client.post("/configurations/orgchart/clone", json={"new_id": "org-copy"})
        self.assertEqual(cloned.status_code, 200)
        self.assertEqual(cloned.json()["data"]["id"], "org-copy")
        self.assertEqual(
            self.client.post("/configurations/missing/clone", json={"new_id": "x"}).status_code,
            404,
        )

        deleted = self.client.delete("/configurations/org-copy")
        self.assertEqual(deleted.json()["data"], {"id": "org-copy", "deleted": True})
        self.assertEqual(self.client.delete("/configurations/default").status_code, 409)

    def test_active_configuration_can_be_switched(self) -> None:
        self.assertEqual(self.client.get("/active-configuration").json()["data"]["id"], "default")

        response = self.client.put("/active-configuration", json={"id": "orgchart"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.registry.active_id, "orgchart")
        self.assertEqual(self.client.put("/active-configuration", json={"id": "nope"}).status_code, 404)

    def test_extract_uses_default_source_and_active_configuration(self) -> None:
        response = self.client.post("/extract", json={})

        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(data["source"], "fixture.ttl")
        self.assertEqual(data["configuration_id"], "default")
        self.assertEqual(len(data["entities"]), 4)
        self.assertEqual(len(data["relationships"]), 3)
        self.assertEqual(set(data["layers"]), {"Earth616", "Earth1610"})
        self.assertEqual(len(data["cross_layer_links"]), 1)
        peter = next(entity for entity in data["entities"] if entity["label"] == "Peter Parker")
        self.assertEqual((peter["x"], peter["y"], peter["z"]), (1.0, 0.0, 2.0))
        self.assertEqual(self.loader.calls, [self.located("fixture.ttl")])

    def test_extract_reuses_cache_unless_refresh_is_requested(self) -> None:
        self.client.post("/extract", json={"source": "a.ttl", "configuration_id": "multiverse"})
        self.client.post("/extract", json={"source": "a.ttl", "configuration_id": "multiverse"})
        self.assertEqual(self.loader.calls, [self.located("a.ttl")])

        self.client.post("/extract", json={"source": "a.ttl", "configuration_id": "multiverse", "refresh": True})
        self.assertEqual(self.loader.calls, [self.located("a.ttl"), self.located("a.ttl")])

    def test_extract_rejects_sources_outside_the_source_root(self) -> None:
        for source in ("/etc/passwd", "../outside.ttl", "http://169.254.169.254/latest", "file:///etc/passwd"):
            with self.subTest(source=source):
                with self.assertLogs("triplemap.routers.extraction", level="WARNING"):
                    response = self.client.post("/extract", json={"source": source})

                self.assertEqual(response.status_code, 400)
                self.assertIn("outside the allowed source locations", response.json()["detail"])
        self.assertEqual(self.loader.calls, [])

    def test_extract_accepts_allowlisted_remote_source(self) -> None:
        url = "https://data.example.org/universe.ttl"

        response = self.client.post("/extract", json={"source": url})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["source"], url)
        self.assertEqual(self.loader.calls, [url])

    def test_extract_error_mapping(self) -> None:
        self.assertEqual(self.client.post("/extract", json={"configuration_id": "nope"}).status_code, 404)

        with self.assertLogs("triplemap.services.extraction", level="ERROR"):
            response = self.client.post("/extract", json={"source": "missing.ttl"})
        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["detail"], 'Failed to load source "missing.ttl"')
        self.assertNotIn("root:x", response.text)
        self.assertNotIn(str(self.root), response.text)

        with self.assertLogs("triplemap.services.extraction", level="ERROR"):
            response = self.client.post("/extract", json={"source": "empty.ttl"})
        self.assertEqual(response.status_code, 502)

    def test_extract_maps_invalid_configuration_to_422(self) -> None:
        service = ExtractionService(self.registry, self.loader, _RejectingExtractor())
        client = TestClient(create_app(settings=self.settings, registry=self.registry, extraction_service=service))

        with self.assertLogs("triplemap.services.extraction", level="ERROR"):
            response = client.post("/extract", json={})

        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["detail"]["violations"], ["Transform 'nope' is not registered"])

    def test_updating_a_configuration_invalidates_cached_results(self) -> None:
        payload = json.loads(self.registry.export_as_text("multiverse"))
        self.client.post("/extract", json={"source": "a.ttl", "configuration_id": "multiverse"})

        self.client.put("/configurations/multiverse", json=payload)

        self.assertIsNone(self.service.get_cached(self.located("a.ttl"), "multiverse"))


class CreateAppTests(unittest.TestCase):
    def test_unknown_active_configuration_falls_back_to_default(self) -> None:
        registry = ConfigurationRegistry()

        with self.assertLogs("triplemap.main", level="WARNING") as logs:
            create_app(settings=Settings(active_configuration_id="ghost"), registry=registry)

        self.assertEqual(registry.active_id, "default")
        self.assertIn("app.active_configuration_unknown id=ghost fallback=default", logs.output[0])


if __name__ == "__main__":
    unittest.main()
