"""
Tests for the atomic unit-of-work helper and foreign key enforcement
"""
import pytest

from webseries.database import atomic
from webseries.exceptions import Conflict, NotFound
from webseries.models.country import Country
from webseries.models.series import Episode, Series


def test_atomic_commits_on_success(db):
    with atomic(db):
        db.add(Country(name="Japan"))

    db.rollback()
    assert db.query(Country).filter(Country.name == "Japan").count() == 1


def test_atomic_rolls_back_everything_on_error(db):
    with pytest.raises(NotFound):
        with atomic(db):
            db.add(Country(name="Japan"))
            db.flush()
            raise NotFound("Series not found")

    assert db.query(Country).count() == 0


def test_integrity_error_becomes_conflict(db):
    series = Series(name="Dark", country_of_release="Germany")
    db.add(series)
    db.commit()

    with pytest.raises(Conflict):
        with atomic(db):
            db.add(Country(name="Germany"))
            db.add(Episode(series_id=series.id, episode_no=1))
            db.add(Episode(series_id=series.id, episode_no=1))

    # Nothing from the failed block survives
    assert db.query(Country).count() == 0
    assert db.query(Episode).count() == 0


def test_foreign_keys_are_enforced(db):
    with pytest.raises(Conflict):
        with atomic(db):
            db.add(Episode(series_id=9999, episode_no=1))
