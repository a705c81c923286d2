"""
Tests for watch progress and the continue-watching list
"""
from datetime import datetime, timedelta

from conftest import API
from webseries.models.series import Episode
from webseries.models.watch_history import WatchHistory


def report(client, viewer, episode, progress):
    return client.post(
        f"{API}/episodes/{episode['id']}/{episode['series_id']}/progress",
        json={"progress": progress},
        headers=viewer["headers"],
    )


def test_progress_is_upserted(client, db, customer, create_series, create_episode):
    series = create_series()
    episode = create_episode(series["id"], 1)

    first = report(client, customer, episode, 20)
    second = report(client, customer, episode, 55)

    assert first.status_code == second.status_code == 200
    assert second.json()["progress"] == 55
    assert db.query(WatchHistory).filter(WatchHistory.viewer_id == customer["id"]).count() == 1

    first_seen = datetime.fromisoformat(first.json()["last_watched"])
    second_seen = datetime.fromisoformat(second.json()["last_watched"])
    assert second_seen >= first_seen


def test_every_report_counts_a_view(client, db, customer, create_series, create_episode):
    series = create_series()
    episode = create_episode(series["id"], 1)

    report(client, customer, episode, 10)
    report(client, customer, episode, 30)

    db.expire_all()
    assert db.get(Episode, episode["id"]).viewers == 2


def test_episode_must_belong_to_series(client, db, customer, create_series, create_episode):
    series = create_series("First")
    other = create_series("Second")
    episode = create_episode(series["id"], 1)

    response = client.post(
        f"{API}/episodes/{episode['id']}/{other['id']}/progress",
        json={"progress": 10},
        headers=customer["headers"],
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Episode not found"}
    assert db.query(WatchHistory).count() == 0
    db.expire_all()
    assert db.get(Episode, episode["id"]).viewers == 0


def test_progress_is_bounded(client, customer, create_series, create_episode):
    series = create_series()
    episode = create_episode(series["id"], 1)

    assert report(client, customer, episode, 101).status_code == 400
    assert report(client, customer, episode, -1).status_code == 400
    assert report(client, customer, episode, 100).status_code == 200


def test_progress_requires_authentication(client, create_series, create_episode):
    series = create_series()
    episode = create_episode(series["id"], 1)

    response = client.post(
        f"{API}/episodes/{episode['id']}/{series['id']}/progress", json={"progress": 10}
    )

    assert response.status_code == 401


def test_get_progress(client, customer, create_series, create_episode):
    series = create_series()
    watched = create_episode(series["id"], 1)
    unwatched = create_episode(series["id"], 2)
    report(client, customer, watched, 42)

    saved = client.get(f"{API}/episodes/{watched['id']}/progress", headers=customer["headers"])
    missing = client.get(f"{API}/episodes/{unwatched['id']}/progress", headers=customer["headers"])

    assert saved.json()["progress"] == 42
    assert missing.status_code == 200
    assert missing.json() is None


def test_continue_watching(client, db, customer, create_series, create_episode):
    series = create_series("Narcos")
    episodes = [create_episode(series["id"], number, title=f"Episode {number}") for number in range(1, 13)]
    for episode in episodes:
        report(client, customer, episode, 30)
    report(client, customer, episodes[0], 95)

    # Spread timestamps so the newest-first order is deterministic
    start = datetime(2024, 1, 1)
    for offset, episode in enumerate(episodes):
        db.query(WatchHistory).filter(
            WatchHistory.viewer_id == customer["id"],
            WatchHistory.episode_id == episode["id"],
        ).update({WatchHistory.last_watched: start + timedelta(minutes=offset)})
    db.commit()

    response = client.get(f"{API}/episodes/continue/watching", headers=customer["headers"])

    assert response.status_code == 200
    items = response.json()
    assert len(items) == 10
    assert [item["episode_no"] for item in items] == list(range(12, 2, -1))
    assert items[0]["series_name"] == "Narcos"
    assert items[0]["episode_title"] == "Episode 12"
    assert all(item["progress"] < 90 for item in items)


def test_continue_watching_is_per_viewer(client, customer, make_viewer, create_series, create_episode):
    other = make_viewer()
    series = create_series()
    episode = create_episode(series["id"], 1)
    report(client, other, episode, 50)

    response = client.get(f"{API}/episodes/continue/watching", headers=customer["headers"])

    assert response.json() == []
