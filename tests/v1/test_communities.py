# tests/v1/test_communities.py
"""Tests for community-related endpoints."""

from fastapi import status


def test_list_communities(client, public_community, private_community) -> None:
    """Test listing all communities."""
    response = client.get("/api/v1/communities/")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert {c["slug"] for c in data} == {"python-lovers", "rust-fans"}


def test_list_communities_most_members_first(client, db_session, public_community, private_community) -> None:
    from subfapp.services.membership import MembershipLedger

    MembershipLedger(db_session).join(private_community.id, "user-carol")

    data = client.get("/api/v1/communities/").json()
    assert [c["slug"] for c in data] == ["rust-fans", "python-lovers"]


def test_get_community(client, public_community) -> None:
    """Test getting a specific community."""
    response = client.get(f"/api/v1/communities/{public_community.id}")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["id"] == public_community.id
    assert data["slug"] == "python-lovers"
    assert data["member_count"] == 1
    assert data["creator_id"] == "user-alice"


def test_get_community_by_slug(client, private_community) -> None:
    response = client.get("/api/v1/communities/slug/Rust-Fans")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["id"] == private_community.id

    by_name = client.get("/api/v1/communities/slug/Rust Fans")
    assert by_name.status_code == status.HTTP_200_OK
    assert by_name.json()["id"] == private_community.id


def test_get_nonexistent_community(client) -> None:
    """Test getting a non-existent community."""
    assert client.get("/api/v1/communities/99999").status_code == status.HTTP_404_NOT_FOUND
    assert client.get("/api/v1/communities/slug/nope").status_code == status.HTTP_404_NOT_FOUND


def test_create_community(client, alice_headers) -> None:
    """Test creating a new community."""
    response = client.post(
        "/api/v1/communities/",
        json={
            "name": "My Cool Group!!",
            "description": "A new test community",
            "is_public": False,
        },
        headers=alice_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["slug"] == "my-cool-group"
    assert data["name"] == "My Cool Group!!"
    assert data["is_public"] is False
    assert data["member_count"] == 1

    status_response = client.get(
        f"/api/v1/communities/{data['id']}/membership", headers=alice_headers
    )
    assert status_response.json()["role"] == "admin"


def test_create_community_requires_auth(client) -> None:
    response = client.post("/api/v1/communities/", json={"name": "Anon Club"})
    assert response.status_code in {status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN}


def test_create_duplicate_community(client, bob_headers, public_community) -> None:
    """Test creating a community whose name maps to an existing slug."""
    response = client.post(
        "/api/v1/communities/",
        json={"name": "python -- LOVERS"},
        headers=bob_headers,
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert "already exists" in response.json()["detail"]


def test_create_community_with_unusable_name(client, alice_headers) -> None:
    response = client.post("/api/v1/communities/", json={"name": "!!!"}, headers=alice_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_join_community(client, bob_headers, public_community) -> None:
    """Test joining a community."""
    response = client.post(
        f"/api/v1/communities/{public_community.id}/join",
        headers=bob_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["identity_id"] == "user-bob"
    assert data["role"] == "member"

    community = client.get(f"/api/v1/communities/{public_community.id}").json()
    assert community["member_count"] == 2


def test_join_same_community_twice(client, bob_headers, public_community) -> None:
    """Test joining a community twice."""
    client.post(f"/api/v1/communities/{public_community.id}/join", headers=bob_headers)

    response = client.post(
        f"/api/v1/communities/{public_community.id}/join",
        headers=bob_headers,
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert "Already a member" in response.json()["detail"]

    community = client.get(f"/api/v1/communities/{public_community.id}").json()
    assert community["member_count"] == 2


def test_join_nonexistent_community(client, bob_headers) -> None:
    response = client.post("/api/v1/communities/4242/join", headers=bob_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_leave_community(client, bob_headers, public_community) -> None:
    """Test leaving a community."""
    client.post(f"/api/v1/communities/{public_community.id}/join", headers=bob_headers)

    response = client.delete(
        f"/api/v1/communities/{public_community.id}/leave", headers=bob_headers
    )
    assert response.status_code == status.HTTP_204_NO_CONTENT

    community = client.get(f"/api/v1/communities/{public_community.id}").json()
    assert community["member_count"] == 1


def test_leave_community_not_joined(client, bob_headers, public_community) -> None:
    """Test leaving a community the user hasn't joined."""
    response = client.delete(
        f"/api/v1/communities/{public_community.id}/leave",
        headers=bob_headers,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert "Not a member" in response.json()["detail"]


def test_membership_status_anonymous(client, public_community, private_community) -> None:
    public = client.get(f"/api/v1/communities/{public_community.id}/membership").json()
    assert public == {
        "is_member": False,
        "role": None,
        "can_view_posts": True,
        "can_create_post": False,
    }

    private = client.get(f"/api/v1/communities/{private_community.id}/membership").json()
    assert private["can_view_posts"] is False


def test_membership_status_rejects_bad_token(client, public_community) -> None:
    response = client.get(
        f"/api/v1/communities/{public_community.id}/membership",
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_private_member_list_requires_membership(
    client, alice_headers, bob_headers, private_community
) -> None:
    url = f"/api/v1/communities/{private_community.id}/members"
    assert client.get(url, headers=bob_headers).status_code == status.HTTP_403_FORBIDDEN

    response = client.get(url, headers=alice_headers)
    assert response.status_code == status.HTTP_200_OK
    assert [m["identity_id"] for m in response.json()] == ["user-alice"]


def test_update_images_creator_only(client, alice_headers, bob_headers, public_community) -> None:
    url = f"/api/v1/communities/{public_community.id}/images"

    response = client.patch(url, json={"banner_url": "/uploads/banners/x.png"}, headers=bob_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN

    response = client.patch(url, json={"banner_url": "/uploads/banners/x.png"}, headers=alice_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["banner_url"] == "/uploads/banners/x.png"
    assert response.json()["image_url"] is None


def test_update_images_rejects_foreign_refs(client, alice_headers, public_community) -> None:
    url = f"/api/v1/communities/{public_community.id}/images"

    for ref in ("javascript:alert(1)", "/uploads/../../etc/passwd"):
        response = client.patch(url, json={"image_url": ref}, headers=alice_headers)
        assert response.status_code == 422


def test_recount_endpoint(client, db_session, alice_headers, bob_headers, public_community) -> None:
    public_community.member_count = 9
    db_session.commit()

    url = f"/api/v1/communities/{public_community.id}/recount"
    assert client.post(url, headers=bob_headers).status_code == status.HTTP_403_FORBIDDEN

    response = client.post(url, headers=alice_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "community_id": public_community.id,
        "previous_count": 9,
        "member_count": 1,
        "diverged": True,
    }
