"""Example 01: Basic Usage - SimpleNoSQL Fundamentals.

This example demonstrates the fundamental operations:
- Defining payload types as pydantic models
- Saving entities addressed by (bucket, entity id)
- Replacing a document by saving the same key again
- Reading one entity, a whole bucket, and a filtered bucket
- Deleting one entity and a whole bucket
- Running the same calls off the main thread with the task facade
"""

import os
import tempfile

from simplenosql import Entity, IdentifiedModel, SimpleNoSQL, StorageEngine, StoreConfig, where


# Step 1: Define payload types
# IdentifiedModel payloads get their `id` filled in from the entity key on read.
class Album(IdentifiedModel):
    """An album stored in the "albums" bucket."""

    title: str
    year: int
    tracks: list[str] = []


def main():
    """Run the basic usage example."""
    print("=" * 80)
    print("SIMPLENOSQL BASIC USAGE EXAMPLE")
    print("=" * 80)

    db_path = os.path.join(tempfile.mkdtemp(), "albums.db")

    # Step 2: Open the storage engine
    # The table is created on first use; every call opens and closes its own connection.
    engine = StorageEngine(StoreConfig(db_path=db_path))

    # Step 3: Save entities
    engine.save(Entity("albums", "kid-a", Album(title="Kid A", year=2000)))
    engine.save(Entity("albums", "amnesiac", Album(title="Amnesiac", year=2001)))
    engine.save(
        Entity(
            "albums",
            "ok-computer",
            Album(title="OK Computer", year=1997, tracks=["Airbag", "Paranoid Android"]),
        )
    )

    # Step 4: Saving an existing key replaces the whole document
    engine.save(Entity("albums", "kid-a", Album(title="Kid A", year=2000, tracks=["Idioteque"])))

    # Step 5: Read back
    album = engine.get_by_key("albums", "kid-a", Album)[0]
    print(f"\nBy key: {album.data.title} (id back-filled: {album.data.id}), {album.data.tracks}")

    print("\nWhole bucket:")
    for entity in engine.get_by_bucket("albums", Album):
        print(f"  {entity.id}: {entity.data.title} ({entity.data.year})")

    nineties = engine.get_by_bucket("albums", Album, where(lambda e: e.data.year < 2000))
    print(f"\nReleased before 2000: {[e.data.title for e in nineties]}")

    # Step 6: Delete
    engine.delete_entity("albums", "amnesiac")
    print(f"\nAfter deleting one: {engine.count('albums')} albums left")
    engine.close()

    # Step 7: Background tasks
    with SimpleNoSQL(StoreConfig(db_path=db_path)) as store:
        future = store.bucket("albums").using(Album).retrieve()
        print(f"Retrieved in background: {[e.id for e in future.result()]}")
        store.bucket("albums").delete().result()
        print(f"After deleting the bucket: {store.engine.count('albums')} albums left")


if __name__ == "__main__":
    main()
