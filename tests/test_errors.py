from fastapi import Body

from app.core.exceptions import ConflictError, NotFoundError


def test_404_not_found(client):
    response = client.get("/non-existent-route")
    assert response.status_code == 404
    data = response.json()
    assert "message" in data
    assert data["code"] == "HTTP_ERROR"


def test_405_method_not_allowed(client):
    response = client.get("/api/auth/login")
    assert response.status_code == 405
    assert response.json()["code"] == "HTTP_ERROR"


def test_request_validation_error_is_400(client):
    from app.main import app

    @app.post("/test-validation")
    def create_item(price: int = Body(..., embed=True)):
        return {"price": price}

    response = client.post("/test-validation", json={"price": "invalid"})
    assert response.status_code == 400
    data = response.json()
    assert data == {"message": "Invalid request body", "code": "VALIDATION_ERROR"}


def test_custom_exception(client):
    from app.main import app

    @app.get("/test-custom-error")
    def trigger_custom_error():
        raise NotFoundError(message="Item not found")

    response = client.get("/test-custom-error")
    assert response.status_code == 404
    data = response.json()
    assert data["code"] == "NOT_FOUND"
    assert data["message"] == "Item not found"


def test_conflict_maps_to_400(client):
    from app.main import app

    @app.get("/test-conflict")
    def trigger_conflict():
        raise ConflictError()

    response = client.get("/test-conflict")
    assert response.status_code == 400
    assert response.json()["code"] == "CONFLICT"


def test_unhandled_exception_hides_detail(client):
    from app.main import app

    @app.get("/test-crash")
    def crash():
        raise RuntimeError("mongodb://admin:hunter2@db")

    response = client.get("/test-crash")
    assert response.status_code == 500
    assert response.json() == {"message": "Server error", "code": "INTERNAL_ERROR"}
    assert "hunter2" not in response.text


def test_liveness(client):
    response = client.get("/live")
    assert response.status_code == 200
    assert response.json() == {"status": "alive"}


def test_health_without_database_is_503(client):
    response = client.get("/health")
    assert response.status_code == 503
    assert response.json()["checks"]["database"] == "unhealthy"
