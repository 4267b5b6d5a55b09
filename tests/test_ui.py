"""
Tests for the server-rendered receipt pages.
"""


def test_receipt_page(client):
    response = client.get("/")
    assert response.status_code == 200
    html = response.get_data(as_text=True)
    assert "Download Receipt" in html
    assert "<svg" in html
    assert "<?xml" not in html


def test_preview(client):
    response = client.get("/receipt/preview?no=R-TEST0001&cashier=ALEX")
    assert response.status_code == 200
    assert response.mimetype == "image/svg+xml"
    assert b"ALEX" in response.data


def test_preview_requires_number(client):
    response = client.get("/receipt/preview")
    assert response.status_code == 400
    assert response.get_json() == {"error": "no required"}


def test_download_png(client):
    response = client.get("/receipt/download?no=R-TEST0001&date=2024-05-01")
    assert response.status_code == 200
    assert response.mimetype == "image/png"
    assert response.headers["Content-Disposition"] == \
        "attachment; filename=receipt-R-TEST0001-2024-05-01.png"


def test_download_svg(client):
    response = client.get("/receipt/download?no=R-1&date=2024-05-01&format=svg")
    assert response.headers["Content-Disposition"].endswith("receipt-R-1-2024-05-01.svg")


def test_download_bad_format(client):
    assert client.get("/receipt/download?no=R-1&format=bmp").status_code == 400


def test_unknown_page_renders_error_template(client):
    response = client.get("/no/such/page")
    assert response.status_code == 404
    assert b"Page not found" in response.data
