import asyncio

from cinelog_api.core.config import settings
from cinelog_api.db.mongo import close_client, ensure_indexes, get_mongo_db

COLLECTIONS = ("contents", "reviews", "review_votes",
               "favorites", "lists", "list_items")


async def main():
    db = await get_mongo_db()
    print("Using DSN:", settings.mongo_dsn, "DB:", settings.mongo_db)
    await ensure_indexes(db)

    for name in COLLECTIONS:
        print(f"\nIndexes in '{name}':")
        async for idx in db[name].list_indexes():
            print(" -", idx["name"], dict(idx["key"]),
                  "unique" if idx.get("unique") else "")

    await close_client()
    print("Indexes ensured.")


if __name__ == "__main__":
    asyncio.run(main())
