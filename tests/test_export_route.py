import pytest


@pytest.mark.parametrize("method", ["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS", "PROPFIND"])
def test_non_post_methods_are_rejected(client, method):
    response = client.request(method, "/api/export")
    assert response.status_code == 405
    assert response.content == b""
    assert response.headers["allow"] == "POST"


def test_csv_export(client):
    response = client.post("/api/export", json={"type": "csv", "data": [{"a": 1, "b": 2}]})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert response.headers["content-disposition"] == "attachment; filename=report.csv"
    assert response.text.splitlines() == ["a,b", "1,2"]


def test_pdf_export(client):
    response = client.post("/api/export", json={"type": "pdf", "data": {"x": 1}})

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == "attachment; filename=report.pdf"
    assert response.content.startswith(b"%PDF")


def test_missing_data_is_rejected(client):
    response = client.post("/api/export", json={"type": "csv"})
    assert response.status_code == 400
    assert response.text == "No data to export"
    assert response.headers["content-type"].startswith("text/plain")


def test_empty_body_is_rejected(client):
    response = client.post("/api/export")
    assert response.status_code == 400
    assert response.text == "No data to export"


@pytest.mark.parametrize("body", [{"type": "xml", "data": {"x": 1}}, {"data": {"x": 1}}])
def test_invalid_type_is_rejected(client, body):
    response = client.post("/api/export", json=body)
    assert response.status_code == 400
    assert response.text == "Invalid export type"


@pytest.mark.parametrize("export_type", [5, ["csv"], {"kind": "csv"}, True])
def test_non_string_type_is_rejected(client, export_type):
    response = client.post("/api/export", json={"type": export_type, "data": {"x": 1}})
    assert response.status_code == 400
    assert response.text == "Invalid export type"


def test_missing_data_is_checked_before_type(client):
    response = client.post("/api/export", json={"type": 5})
    assert response.status_code == 400
    assert response.text == "No data to export"


def test_conversion_error_is_plain_text_500(client):
    response = client.post("/api/export", json={"type": "csv", "data": "just a string"})
    assert response.status_code == 500
    assert response.headers["content-type"].startswith("text/plain")
    assert "list of objects" in response.text


def test_malformed_json_is_plain_text_500(client):
    response = client.post("/api/export", content=b"{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 500
    assert response.text


@pytest.mark.parametrize("export_type", ["csv", "pdf"])
def test_repeated_exports_are_identical(client, export_type):
    body = {"type": export_type, "data": [{"area": "Roof", "issue": "Leaking"}, {"area": "Attic", "issue": "Mold"}]}
    first = client.post("/api/export", json=body)
    second = client.post("/api/export", json=body)
    assert first.status_code == 200
    assert first.content == second.content


def test_pdf_uses_configured_title(make_client):
    from io import BytesIO

    from pypdf import PdfReader

    client = make_client(report_title="Lakeside Cottage Report")
    response = client.post("/api/export", json={"type": "pdf", "data": {"x": 1}})
    text = PdfReader(BytesIO(response.content)).pages[0].extract_text()
    assert "Lakeside Cottage Report" in text


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
