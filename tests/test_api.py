from fastapi.testclient import TestClient

from biotools.main import app

client = TestClient(app)


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_reverse_complement_endpoint():
    response = client.post("/api/reverse-complement", json={"sequences": ["AAAA", "CGT"]})
    assert response.status_code == 200
    assert response.json() == {"result": "ACGTTTT"}


def test_length_and_gc_content_endpoints():
    length = client.post("/api/length", json={"sequences": ["GAT-CT ACA"]})
    gc = client.post("/api/gc-content", json={"sequences": ["GATTACA"]})

    assert length.json()["result"] == 8
    assert gc.json()["result"] == 0.2857142857142857


def test_pairwise_endpoint():
    response = client.post(
        "/api/pairwise",
        json={
            "query": "ACAGT",
            "reference": "ACGT",
            "mode": "local",
            "use_0_based_coords": True,
        },
    )
    data = response.json()

    assert response.status_code == 200
    assert data["text"] == "3 GT 5\n  ||\n2 GT 4"
    assert data["score"] == 2
    assert data["reverse_complemented"] is False
    assert (data["query_start"], data["query_end"]) == (3, 5)
    assert (data["reference_start"], data["reference_end"]) == (2, 4)


def test_pairwise_endpoint_reverse_complement():
    response = client.post(
        "/api/pairwise",
        json={"query": "TGTAATC", "reference": "GGCGATTACAATGACA", "try_rc": True},
    )
    data = response.json()

    assert data["reverse_complemented"] is True
    assert data["text"] == "7 GATTACA 1 RC\n  |||||||\n4 GATTACA 10"


def test_invalid_input_is_a_bad_request():
    response = client.post("/api/complement", json={"sequences": ["ACNT"]})
    assert response.status_code == 400
    assert "invalid base 'N'" in response.json()["detail"]


def test_invalid_line_width_is_rejected():
    response = client.post(
        "/api/pairwise", json={"query": "ACGT", "reference": "ACGT", "line_width": 0}
    )
    assert response.status_code == 422
