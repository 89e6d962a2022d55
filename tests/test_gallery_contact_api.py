from cafex_admin.application.service import DEFAULT_CONTACT


def add_image(client, title, **extra):
    payload = {"title": title, "image": f"/uploads/{title.lower()}.jpg", **extra}
    resp = client.post('/gallery/', json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_gallery_crud(client):
    image = add_image(client, "Counter", description="Morning rush")
    assert image["featured"] is False
    assert image["display_order"] == 0

    resp = client.get(f"/gallery/{image['id']}")
    assert resp.status_code == 200
    assert resp.json()["description"] == "Morning rush"

    resp = client.put(
        f"/gallery/{image['id']}",
        json={"title": "Front counter", "image": image["image"], "featured": True, "displayOrder": 3},
    )
    assert resp.status_code == 200
    assert resp.json()["title"] == "Front counter"
    assert resp.json()["display_order"] == 3
    assert resp.json()["description"] == ""

    assert client.delete(f"/gallery/{image['id']}").status_code == 204
    assert client.get(f"/gallery/{image['id']}").status_code == 404


def test_gallery_requires_title_and_image(client):
    assert client.post('/gallery/', json={"title": "No image"}).status_code == 400
    assert client.post('/gallery/', json={"image": "/uploads/x.jpg"}).status_code == 400


def test_gallery_ordering_and_featured(client):
    patio = add_image(client, "Patio", display_order=2, featured=True)
    beans = add_image(client, "Beans", display_order=1)
    latte_art = add_image(client, "LatteArt", display_order=1, featured=True)

    ordered = [g["id"] for g in client.get('/gallery/').json()]
    assert ordered == [latte_art["id"], beans["id"], patio["id"]]

    featured = [g["id"] for g in client.get('/gallery/featured').json()]
    assert featured == [latte_art["id"], patio["id"]]


def test_contact_is_created_with_defaults(client):
    resp = client.get('/contact/')
    assert resp.status_code == 200
    data = resp.json()
    assert data["phone"] == DEFAULT_CONTACT["phone"]
    assert data["email"] == "info@cafex.com"
    assert data["social_media"] == {
        "facebook": "facebook.com/cafex",
        "instagram": "instagram.com/cafex",
        "twitter": "twitter.com/cafex",
    }

    # Second read returns the same record rather than a new default
    assert client.get('/contact/').json()["updated_at"] == data["updated_at"]


def test_contact_update_merges_fields(client):
    resp = client.put('/contact/', json={
        "hours": "Every day: 6AM - 9PM",
        "socialMedia": {"instagram": "instagram.com/cafex_official"},
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["hours"] == "Every day: 6AM - 9PM"
    assert data["address"] == DEFAULT_CONTACT["address"]
    assert data["social_media"]["instagram"] == "instagram.com/cafex_official"
    assert data["social_media"]["facebook"] == "facebook.com/cafex"

    resp = client.put('/contact/', json={"website": ""})
    assert resp.json()["website"] == ""
    assert resp.json()["hours"] == "Every day: 6AM - 9PM"
