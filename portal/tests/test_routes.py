from portal.tests.factories import add_item


def test_list_ranges(client):
    response = client.get("/api/admin/scan-parts?action=list-ranges")

    assert response.status_code == 200
    assert response.get_json() == {"ranges": ["12300-12399", "90000-90099"]}


def test_scan_parts_existence_report(client, database):
    with database.session_scope() as db:
        add_item(db, "90001")

    response = client.get("/api/admin/scan-parts")

    assert response.status_code == 200
    body = response.get_json()
    assert (body["total"], body["new"], body["existing"]) == (4, 3, 1)
    by_pn = {p["apcPN"]: p for p in body["parts"]}
    assert by_pn["90001"]["existsInDB"] is True
    assert by_pn["12310"]["currentRev"] == "E-A"
    assert by_pn["12310"]["itemTypeId"] == 4


def test_scan_parts_selected_ranges(client):
    body = client.get("/api/admin/scan-parts?ranges=90000-90099").get_json()

    assert body["total"] == 2
    assert {p["apcPN"] for p in body["parts"]} == {"90001", "90002"}


def test_scan_parts_missing_root_is_500(app, client, tmp_path):
    app.config["PARTS_ROOT"] = str(tmp_path / "nowhere")

    response = client.get("/api/admin/scan-parts")

    assert response.status_code == 500
    assert response.get_json()["error"] == "Failed to scan parts"


def test_import_requires_parts(client):
    assert client.post("/api/admin/import-parts", json={"parts": []}).status_code == 400
    assert client.post("/api/admin/import-parts", json={}).status_code == 400


def test_scan_then_import_new_parts(client):
    scanned = client.get("/api/admin/scan-parts").get_json()["parts"]

    response = client.post("/api/admin/import-parts", json={"parts": scanned})

    assert response.status_code == 200
    assert response.get_json() == {"success": True, "imported": 4, "skipped": 0, "errors": []}

    rescan = client.get("/api/admin/scan-parts").get_json()
    assert (rescan["new"], rescan["existing"]) == (0, 4)


def test_sync_compare_and_apply(client, database):
    with database.session_scope() as db:
        add_item(db, "90002", customer="Harris Corp")

    body = client.get("/api/admin/sync-parts").get_json()

    assert (body["total"], body["mismatches"], body["newParts"]) == (4, 1, 3)
    mismatch = next(c for c in body["comparisons"] if c["existsInDB"])
    folder_values = {d["field"]: d["folderValue"] for d in mismatch["differences"]}

    response = client.post("/api/admin/sync-parts", json={"updates": [
        {"dbId": mismatch["dbId"], "apcPN": mismatch["apcPN"], **folder_values},
    ]})

    assert response.get_json() == {"success": True, "updated": 1, "errors": []}
    after = client.get("/api/admin/sync-parts").get_json()
    assert after["mismatches"] == 0


def test_sync_invalid_payload(client):
    response = client.post("/api/admin/sync-parts", json={"updates": [{"apcPN": "12345"}]})

    assert response.status_code == 400


def test_products_listing(client, database):
    with database.session_scope() as db:
        add_item(db, "71234", item_type_id=5, customer="Acme")
        add_item(db, "12345", item_type_id=4)
        add_item(db, "00001", m_item_type_id=2)

    body = client.get("/api/products").get_json()

    assert [p["apcPN"] for p in body] == ["12345", "71234"]
    assert body[1]["item_type_name"] == "Printed Circuit Board"
    assert body[1]["customer"] == "Acme"


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.get_json()
    assert body["status"] == "healthy"
    assert body["checks"]["catalog"]["success"] is True


def test_health_unreadable_root(app, client, tmp_path):
    app.config["PARTS_ROOT"] = str(tmp_path / "nowhere")

    response = client.get("/api/health")

    assert response.status_code == 503
    assert response.get_json()["checks"]["partsRoot"]["success"] is False


def test_unknown_route_is_json_404(client):
    response = client.get("/api/nope")

    assert response.status_code == 404
    assert response.get_json() == {"error": "Not found"}


def test_product_detail(client, database):
    with database.session_scope() as db:
        item_id = add_item(db, "71234", item_type_id=5, customer="Acme").id

    response = client.get(f"/api/products/{item_id}")

    assert response.status_code == 200
    body = response.get_json()
    assert (body["id"], body["apcPN"], body["customer"]) == (item_id, "71234", "Acme")
    assert body["item_type_name"] == "Printed Circuit Board"
    assert body["item_type_code"] == "PCB"


def test_product_detail_not_found(client):
    response = client.get("/api/products/9999")

    assert response.status_code == 404
    assert response.get_json() == {"error": "Product not found"}


def test_product_edit(client, database):
    with database.session_scope() as db:
        item_id = add_item(db, "12345", customer="Old", customer_pn="X-1", build_rev="C").id

    response = client.put(f"/api/products/{item_id}", json={
        "customer": "Harris",
        "customerPN": "",
        "currentRev": "B",
        "description": "Chassis harness",
        "fullPath": "/p/12345 Harris",
    })

    assert response.status_code == 200
    assert response.get_json() == {"success": True}
    body = client.get(f"/api/products/{item_id}").get_json()
    assert body["customer"] == "Harris"
    assert body["customerPN"] is None
    assert body["currentRev"] == "B"
    assert body["description"] == "Chassis harness"
    assert body["fullPath"] == "/p/12345 Harris"
    assert body["buildRev"] == "C"


def test_product_edit_not_found(client):
    response = client.put("/api/products/9999", json={"customer": "Acme"})

    assert response.status_code == 404
    assert response.get_json() == {"error": "Product not found"}


def test_product_edit_invalid_payload(client, database):
    with database.session_scope() as db:
        item_id = add_item(db, "12345").id

    response = client.put(f"/api/products/{item_id}", json={"customer": ["not", "a", "string"]})

    assert response.status_code == 400
    assert response.get_json()["error"] == "Invalid product payload"
