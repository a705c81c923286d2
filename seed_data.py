"""
Script to seed the database with countries, sample series and an admin account
Run this from the project root directory:
    python seed_data.py
"""
from datetime import date

from webseries.database import SessionLocal, create_tables
from webseries.models.country import Country
from webseries.models.series import Episode, Series, SeriesGenre
from webseries.models.viewer import Role, Viewer
from webseries.utils.security import get_password_hash


COUNTRIES = ["India", "United States", "United Kingdom", "South Korea", "Spain", "Germany", "Japan"]

SERIES = [
    {
        "name": "Sacred Games",
        "description": "A Mumbai police officer receives a call from a gangster.",
        "release_date": date(2018, 7, 6),
        "country_of_release": "India",
        "genres": ["Crime", "Thriller"],
        "episodes": ["Ashwathama", "Halahala", "Atapi Vatapi"],
    },
    {
        "name": "Dark",
        "description": "A missing child sets four families on a hunt through time.",
        "release_date": date(2017, 12, 1),
        "country_of_release": "Germany",
        "genres": ["Mystery", "Science Fiction", "Thriller"],
        "episodes": ["Secrets", "Lies", "Past and Present", "Double Lives"],
    },
    {
        "name": "Money Heist",
        "description": "A criminal mastermind plans the biggest heist in history.",
        "release_date": date(2017, 5, 2),
        "country_of_release": "Spain",
        "genres": ["Action", "Crime"],
        "episodes": ["Efectuar lo acordado", "Imprudencias letales"],
    },
]


def seed_countries(db):
    """Create reference countries"""
    print("🌍 Creating countries...")
    created_count = 0

    for name in COUNTRIES:
        if not db.query(Country).filter(Country.name == name).first():
            db.add(Country(name=name))
            created_count += 1
            print(f"  ✓ Created country: {name}")
        else:
            print(f"  ⊙ Country already exists: {name}")

    db.commit()
    print(f"✅ Created {created_count} new countries\n")


def seed_series(db):
    """Create sample series with genres and episodes"""
    print("🎬 Creating series...")

    for data in SERIES:
        if db.query(Series).filter(Series.name == data["name"]).first():
            print(f"  ⊙ Series already exists: {data['name']}")
            continue

        series = Series(
            name=data["name"],
            description=data["description"],
            release_date=data["release_date"],
            country_of_release=data["country_of_release"],
            number_of_episodes=len(data["episodes"]),
        )
        db.add(series)
        db.flush()

        db.add_all([SeriesGenre(series_id=series.id, type_name=genre) for genre in data["genres"]])
        db.add_all([
            Episode(series_id=series.id, episode_no=number, title=title, duration_min=45)
            for number, title in enumerate(data["episodes"], start=1)
        ])
        print(f"  ✓ Created series: {data['name']} ({len(data['episodes'])} episodes)")

    db.commit()
    print()


def seed_admin_user(db):
    """Create an admin account if not exists"""
    admin = db.query(Viewer).filter(Viewer.email == "admin@example.com").first()

    if admin:
        print("⊙ Admin user already exists\n")
        return

    print("👤 Creating admin user...")
    home_series = db.query(Series).order_by(Series.id).first()
    home_country = db.query(Country).order_by(Country.id).first()
    admin = Viewer(
        first_name="Admin",
        last_name="User",
        email="admin@example.com",
        password_hash=get_password_hash("Admin1234"),
        role=Role.ADMIN,
        series_id=home_series.id if home_series else None,
        country_id=home_country.id if home_country else None,
    )
    db.add(admin)
    db.commit()
    print("✅ Admin user created")
    print("   Email: admin@example.com")
    print("   Password: Admin1234")
    print("   ⚠️  CHANGE THIS PASSWORD IN PRODUCTION!\n")


def main():
    print("=" * 50)
    print("🌱 SEEDING DATABASE")
    print("=" * 50 + "\n")

    create_tables()
    db = SessionLocal()
    try:
        seed_countries(db)
        seed_series(db)
        seed_admin_user(db)
    finally:
        db.close()

    print("=" * 50)
    print("✅ Database seeding completed!")
    print("=" * 50)


if __name__ == "__main__":
    main()
