"""Unit tests for data stores and the store factory."""

import asyncio
import json
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import httpx
import pytest
from stores import DataFetchError, get_store
from stores.firebase.adapter import FirebaseStore
from stores.snapshot.adapter import SnapshotStore


def firebase_with(handler, **config):
    config.setdefault("database_url", "https://db.example/")
    return FirebaseStore(config, transport=httpx.MockTransport(handler))


class TestStoreFactory:
    """Test get_store store selection."""

    def test_default_is_firebase(self):
        store = get_store({})
        assert isinstance(store, FirebaseStore)
        assert store.get_store_name() == "firebase"

    def test_snapshot(self, tmp_path):
        store = get_store({"store": {"type": "Snapshot", "path": str(tmp_path / "data.json")}})
        assert isinstance(store, SnapshotStore)
        assert store.get_store_name() == "snapshot"

    def test_unsupported_store(self):
        with pytest.raises(ValueError, match="Unsupported store"):
            get_store({"store": {"type": "postgres"}})


class TestFirebaseStore:
    """Test the Firebase REST store against a mock transport."""

    def test_fetch_node(self):
        requested = []

        def handler(request):
            requested.append(str(request.url))
            return httpx.Response(200, json={"b1": {"address": "서울 강남구"}})

        store = firebase_with(handler)
        data = asyncio.run(store.fetch_buildings())

        assert data == {"b1": {"address": "서울 강남구"}}
        assert requested == ["https://db.example/buildings.json"]

    def test_vacancies_node_with_auth(self):
        requested = []

        def handler(request):
            requested.append(request.url)
            return httpx.Response(200, json={})

        store = firebase_with(handler, auth="secret")
        asyncio.run(store.fetch_vacancies())

        assert requested[0].path == "/vacancies.json"
        assert requested[0].params["auth"] == "secret"

    def test_null_node_is_empty(self):
        store = firebase_with(lambda request: httpx.Response(200, content=b"null"))
        assert asyncio.run(store.fetch_buildings()) == {}

    def test_http_error_status(self):
        store = firebase_with(lambda request: httpx.Response(500, text="boom"))
        with pytest.raises(DataFetchError, match="status=500"):
            asyncio.run(store.fetch_buildings())

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("offline", request=request)

        store = firebase_with(handler)
        with pytest.raises(DataFetchError):
            asyncio.run(store.fetch_vacancies())

    def test_invalid_json(self):
        store = firebase_with(lambda request: httpx.Response(200, content=b"{not json"))
        with pytest.raises(DataFetchError, match="Invalid JSON"):
            asyncio.run(store.fetch_buildings())

    def test_non_object_payload(self):
        store = firebase_with(lambda request: httpx.Response(200, json=[1, 2]))
        with pytest.raises(DataFetchError, match="Unexpected payload"):
            asyncio.run(store.fetch_buildings())


class TestSnapshotStore:
    """Test the local JSON snapshot store."""

    def test_reads_both_collections(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text(
            json.dumps({"buildings": {"b1": {}}, "vacancies": {"b1": {"v1": {}}}}),
            encoding="utf-8",
        )
        store = SnapshotStore({"path": str(path)})

        assert asyncio.run(store.fetch_buildings()) == {"b1": {}}
        assert asyncio.run(store.fetch_vacancies()) == {"b1": {"v1": {}}}

    def test_missing_collection_is_empty(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text(json.dumps({"buildings": None}), encoding="utf-8")
        store = SnapshotStore({"path": str(path)})

        assert asyncio.run(store.fetch_buildings()) == {}
        assert asyncio.run(store.fetch_vacancies()) == {}

    def test_missing_file(self, tmp_path):
        store = SnapshotStore({"path": str(tmp_path / "absent.json")})
        with pytest.raises(DataFetchError, match="not found"):
            asyncio.run(store.fetch_buildings())

    def test_invalid_file(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("[]", encoding="utf-8")
        store = SnapshotStore({"path": str(path)})
        with pytest.raises(DataFetchError):
            asyncio.run(store.fetch_buildings())

    def test_path_required(self):
        with pytest.raises(ValueError):
            SnapshotStore({})


class TestPackaging:
    """Test that store backends are picked up by package discovery."""

    def test_backends_are_discovered(self):
        tomllib = pytest.importorskip("tomllib")
        setuptools = pytest.importorskip("setuptools")

        root = Path(__file__).parent.parent
        with open(root / "pyproject.toml", "rb") as f:
            find_config = tomllib.load(f)["tool"]["setuptools"]["packages"]["find"]

        assert find_config.get("namespaces") is True
        packages = setuptools.find_namespace_packages(
            where=str(root),
            include=find_config["include"],
            exclude=find_config.get("exclude", []),
        )

        assert "stores" in packages
        assert "stores.firebase" in packages
        assert "stores.snapshot" in packages
        assert "tests" not in packages
