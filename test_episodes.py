"""
Tests for episode endpoints and the stored episode count
"""
from conftest import API
from webseries.models.series import Series


def episode_count(db, series_id):
    db.expire_all()
    return db.get(Series, series_id).number_of_episodes


def test_create_episode_updates_count(client, db, create_series, create_episode):
    series = create_series()

    episode = create_episode(series["id"], 1, title="Ashwathama", duration_min=52)
    create_episode(series["id"], 2)

    assert episode["viewers"] == 0
    assert episode["tech_interruption"] is False
    assert episode["duration_min"] == 52
    assert episode_count(db, series["id"]) == 2


def test_duplicate_episode_number_is_conflict(client, db, employee, create_series, create_episode):
    series = create_series()
    create_episode(series["id"], 1)

    response = client.post(
        f"{API}/episodes", json={"series_id": series["id"], "episode_no": 1}, headers=employee["headers"]
    )

    assert response.status_code == 409
    assert response.json() == {"error": "Episode number already exists for this series"}
    assert episode_count(db, series["id"]) == 1


def test_same_number_in_other_series_is_fine(create_series, create_episode):
    first = create_series("First")
    second = create_series("Second")

    create_episode(first["id"], 1)
    episode = create_episode(second["id"], 1)

    assert episode["series_id"] == second["id"]


def test_episode_for_missing_series(client, employee):
    response = client.post(f"{API}/episodes", json={"series_id": 9999, "episode_no": 1}, headers=employee["headers"])

    assert response.status_code == 404
    assert response.json() == {"error": "Series not found"}


def test_episode_number_must_be_positive(client, employee, create_series):
    series = create_series()

    response = client.post(
        f"{API}/episodes", json={"series_id": series["id"], "episode_no": 0}, headers=employee["headers"]
    )

    assert response.status_code == 400


def test_customer_cannot_create_episode(client, customer, create_series):
    series = create_series()

    response = client.post(
        f"{API}/episodes", json={"series_id": series["id"], "episode_no": 1}, headers=customer["headers"]
    )

    assert response.status_code == 403


def test_delete_episode_updates_count_and_frees_number(client, db, admin, create_series, create_episode):
    series = create_series()
    first = create_episode(series["id"], 1, title="Pilot")
    create_episode(series["id"], 2)

    response = client.delete(f"{API}/episodes/{first['id']}", headers=admin["headers"])

    assert response.status_code == 200
    assert response.json() == {
        "message": "Episode deleted successfully",
        "id": first["id"],
        "title": "Pilot",
        "number_of_episodes": 1,
    }
    assert episode_count(db, series["id"]) == 1

    # The number can be reused once the episode is gone
    reused = create_episode(series["id"], 1)
    assert reused["episode_no"] == 1
    assert episode_count(db, series["id"]) == 2


def test_delete_missing_episode(client, admin):
    response = client.delete(f"{API}/episodes/9999", headers=admin["headers"])

    assert response.status_code == 404
    assert response.json() == {"error": "Episode not found"}


def test_update_episode(client, employee, create_series, create_episode):
    series = create_series()
    episode = create_episode(series["id"], 1)

    response = client.put(
        f"{API}/episodes/{episode['id']}",
        json={"title": "Ashwathama", "tech_interruption": True},
        headers=employee["headers"],
    )

    assert response.status_code == 200
    assert response.json()["title"] == "Ashwathama"
    assert response.json()["tech_interruption"] is True


def test_update_episode_number_conflict_ignores_itself(client, employee, create_series, create_episode):
    series = create_series()
    first = create_episode(series["id"], 1)
    create_episode(series["id"], 2)

    same_number = client.put(
        f"{API}/episodes/{first['id']}", json={"episode_no": 1}, headers=employee["headers"]
    )
    taken_number = client.put(
        f"{API}/episodes/{first['id']}", json={"episode_no": 2}, headers=employee["headers"]
    )

    assert same_number.status_code == 200
    assert taken_number.status_code == 409


def test_update_episode_with_no_fields(client, employee, create_series, create_episode):
    series = create_series()
    episode = create_episode(series["id"], 1)

    response = client.put(f"{API}/episodes/{episode['id']}", json={}, headers=employee["headers"])

    assert response.status_code == 400


def test_episodes_by_series_are_ordered(client, create_series, create_episode):
    series = create_series()
    for number in (3, 1, 2):
        create_episode(series["id"], number)

    episodes = client.get(f"{API}/episodes/series/{series['id']}").json()

    assert [e["episode_no"] for e in episodes] == [1, 2, 3]


def test_get_episode_includes_series_name(client, create_series, create_episode):
    series = create_series("Narcos")
    episode = create_episode(series["id"], 1)

    response = client.get(f"{API}/episodes/{episode['id']}")

    assert response.status_code == 200
    assert response.json()["series_name"] == "Narcos"


def test_get_missing_episode(client):
    assert client.get(f"{API}/episodes/9999").status_code == 404
