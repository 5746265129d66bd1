"""
Integration tests for all REST API endpoints via TestClient.
"""

import json
import math

import pytest
from fastapi.testclient import TestClient

from exoclassifier.ml.classification import FEATURE_NAMES, ClassificationBackend

HABITABLE = [10, 2, 0.1, 85, 300, 4.5, 1, 1, 5500]
GIANT = [10, 15, 0.1, 85, 300, 4.5, 1, 1, 5500]
SHORT_PERIOD = [0.5, 2, 0.1, 85, 300, 4.5, 1, 1, 5500]


@pytest.fixture(scope="module")
def client():
    """Create a test client with the real app."""
    from exoclassifier.api.main import app
    with TestClient(app) as c:
        yield c


class TestHealthEndpoint:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json() == {"status": "healthy", "message": "Exoplanet Classifier API is running"}


class TestPredictEndpoint:
    def test_predict_habitable(self, client):
        r = client.post("/predict", json={"features": HABITABLE})
        assert r.status_code == 200
        data = r.json()
        assert data["predicted_class"] == "Confirmed"
        assert set(data["probabilities"]) == {"Confirmed", "Candidate", "False Positive"}
        assert math.isclose(sum(data["probabilities"].values()), 1.0, abs_tol=1e-9)
        assert len(data["top_features"]) == 3
        for item in data["top_features"]:
            assert item["feature"] in FEATURE_NAMES
            assert -1.0 < item["importance"] < 1.0
            assert item["value"] == HABITABLE[FEATURE_NAMES.index(item["feature"])]

    def test_predict_giant(self, client):
        data = client.post("/predict", json={"features": GIANT}).json()
        probs = data["probabilities"]
        assert data["predicted_class"] == "False Positive"
        assert probs["False Positive"] == max(probs.values())

    def test_predict_short_period(self, client):
        data = client.post("/predict", json={"features": SHORT_PERIOD}).json()
        assert data["probabilities"]["False Positive"] > 0.34

    def test_predicted_class_matches_probabilities(self, client):
        for features in (HABITABLE, GIANT, SHORT_PERIOD):
            data = client.post("/predict", json={"features": features}).json()
            probs = data["probabilities"]
            assert probs[data["predicted_class"]] == max(probs.values())

    def test_repeat_is_deterministic_for_scores(self, client):
        first = client.post("/predict", json={"features": HABITABLE}).json()
        second = client.post("/predict", json={"features": HABITABLE}).json()
        assert first["predicted_class"] == second["predicted_class"]
        assert first["probabilities"] == second["probabilities"]

    def test_numeric_strings(self, client):
        r = client.post("/predict", json={"features": [str(v) for v in HABITABLE]})
        assert r.status_code == 200
        assert r.json()["predicted_class"] == "Confirmed"

    def test_top_k_query(self, client):
        data = client.post("/predict?top_k=9", json={"features": HABITABLE}).json()
        mags = [abs(f["importance"]) for f in data["top_features"]]
        assert len(mags) == 9
        assert mags == sorted(mags, reverse=True)

    def test_top_k_above_feature_count(self, client):
        data = client.post("/predict?top_k=50", json={"features": HABITABLE}).json()
        assert len(data["top_features"]) == 9

    def test_top_k_zero_rejected(self, client):
        r = client.post("/predict?top_k=0", json={"features": HABITABLE})
        assert r.status_code == 422

    def test_wrong_count(self, client):
        r = client.post("/predict", json={"features": HABITABLE[:8]})
        assert r.status_code == 400
        assert r.json() == {"error": "Invalid input: Expected 9 features", "kind": "shape"}

    def test_missing_features(self, client):
        r = client.post("/predict", json={})
        assert r.status_code == 400
        assert r.json()["kind"] == "shape"

    def test_non_numeric(self, client):
        r = client.post("/predict", json={"features": ["abc"] + HABITABLE[1:]})
        assert r.status_code == 400
        data = r.json()
        assert data["kind"] == "not_numeric"
        assert data["error"].startswith("All features must be numeric values")
        assert "koi_period" in data["error"]

    def test_int_too_large_for_float(self, client):
        body = '{"features": [1' + "0" * 400 + ", 2, 0.1, 85, 300, 4.5, 1, 1, 5500]}"
        r = client.post("/predict", content=body, headers={"Content-Type": "application/json"})
        assert r.status_code == 400
        assert r.json()["kind"] == "not_numeric"

    def test_null_value(self, client):
        features = list(HABITABLE)
        features[3] = None
        r = client.post("/predict", json={"features": features})
        assert r.status_code == 400
        assert r.json()["kind"] == "not_numeric"

    def test_internal_failure_is_opaque(self, client, monkeypatch):
        from exoclassifier.api.main import app_state

        class BrokenBackend(ClassificationBackend):
            name = "broken"

            def predict(self, vector, top_k=3):
                raise RuntimeError("probabilities went non-finite")

        monkeypatch.setitem(app_state, "backend", BrokenBackend())
        r = client.post("/predict", json={"features": HABITABLE})
        assert r.status_code == 500
        assert r.json() == {"error": "Prediction failed"}


class TestUploadEndpoint:
    def test_csv_upload(self, client):
        content = ",".join(FEATURE_NAMES) + "\n" + ",".join(str(v) for v in GIANT) + "\n"
        r = client.post("/predict/upload", files={"file": ("koi.csv", content, "text/csv")})
        assert r.status_code == 200
        data = r.json()
        assert data["predicted_class"] == "False Positive"
        assert data["features"]["koi_prad"] == 15.0

    def test_json_upload_fills_defaults(self, client):
        content = json.dumps({"koi_prad": 2.5})
        r = client.post(
            "/predict/upload?top_k=2",
            files={"file": ("koi.json", content, "application/json")},
        )
        assert r.status_code == 200
        data = r.json()
        assert data["features"]["koi_prad"] == 2.5
        assert data["features"]["koi_teq"] == 300.0
        assert data["predicted_class"] == "Confirmed"
        assert len(data["top_features"]) == 2

    def test_unsupported_file(self, client):
        r = client.post("/predict/upload", files={"file": ("koi.txt", "hello", "text/plain")})
        assert r.status_code == 400
        assert r.json() == {"error": "Failed to parse file. Please check the format.", "kind": "upload"}

    def test_short_csv(self, client):
        r = client.post("/predict/upload", files={"file": ("koi.csv", "a,b\n1,2\n", "text/csv")})
        assert r.status_code == 400

    def test_int_too_large_for_float_uses_default(self, client):
        content = '{"koi_period": 1' + "0" * 400 + ', "koi_prad": 15}'
        r = client.post("/predict/upload", files={"file": ("koi.json", content, "application/json")})
        assert r.status_code == 200
        assert r.json()["features"]["koi_period"] == 10.0
        assert r.json()["predicted_class"] == "False Positive"

    def test_unexpected_parse_failure_is_opaque(self, client, monkeypatch):
        import exoclassifier.api.routes.predict as predict_routes

        def broken_parse(filename, content):
            raise RuntimeError("decoder crashed")

        monkeypatch.setattr(predict_routes, "parse_upload", broken_parse)
        before = client.get("/api/metrics").json()["internal_errors"]
        r = client.post("/predict/upload", files={"file": ("koi.json", "{}", "application/json")})
        assert r.status_code == 500
        assert r.json() == {"error": "Prediction failed"}
        assert client.get("/api/metrics").json()["internal_errors"] == before + 1


class TestFeaturesEndpoint:
    def test_list_features(self, client):
        r = client.get("/features")
        assert r.status_code == 200
        features = r.json()["features"]
        assert [f["name"] for f in features] == list(FEATURE_NAMES)
        assert features[1] == {"name": "koi_prad", "label": "Planet Radius (Earth radii)", "default": 2.0}


class TestMetricsEndpoint:
    def test_metrics_track_requests(self, client):
        before = client.get("/api/metrics").json()
        client.post("/predict", json={"features": HABITABLE})
        client.post("/predict", json={"features": HABITABLE[:3]})
        after = client.get("/api/metrics").json()

        assert after["predictions"] == before["predictions"] + 1
        assert after["validation_failures"] == before["validation_failures"] + 1
        assert after["predictions_by_class"]["Confirmed"] >= 1
        assert after["latency"]["count"] >= 2
        assert after["backend"] == "heuristic"
        assert after["uptime_seconds"] >= 0


class TestCors:
    def test_preflight(self, client):
        r = client.options(
            "/predict",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert r.status_code == 200
        assert r.headers["access-control-allow-origin"] in ("*", "http://localhost:5173")


class TestBackendSelection:
    def test_heuristic_backend(self):
        from exoclassifier.api.main import build_backend
        from exoclassifier.ml.classification import HeuristicEnsemble
        from exoclassifier.utils.config_loader import ClassifierConfig

        backend = build_backend(ClassifierConfig(random_seed=3))
        assert isinstance(backend, HeuristicEnsemble)
        assert backend.name == "heuristic"

    def test_unknown_backend_rejected(self):
        from exoclassifier.api.main import build_backend
        from exoclassifier.utils.config_loader import ClassifierConfig

        # bypass the pattern check to reach the registry lookup
        config = ClassifierConfig.model_construct(backend="xgboost", top_k=3, random_seed=None)
        with pytest.raises(ValueError, match="xgboost"):
            build_backend(config)
