"""Simple console browser for the LZT marketplace proxy."""

import asyncio

from lzt_proxy import SUPPORTED_CATEGORIES, ListingQuery, ProxyError, create_service


async def main() -> None:
    service = create_service()
    print(f"LZT browser is ready. Categories: {', '.join(SUPPORTED_CATEGORIES)}.")
    print("Type a category (optionally followed by a page number), or 'exit' to stop.")

    while True:
        try:
            user_input = input("Category: ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\nExiting.")
            break

        if not user_input:
            continue
        if user_input.lower() in {"exit", "quit"}:
            print("Goodbye.")
            break

        category, _, page = user_input.partition(" ")
        query = ListingQuery(category=category, page=max(int(page), 1) if page.strip().isdigit() else 1)
        try:
            data = await service.list_listings(query)
        except ProxyError as e:
            print(f"Error ({e.status_code}): {e.message}\n")
            continue

        for listing in data["items"]:
            print(f"  [{listing.get('item_id', '?')}] {listing.get('title', '')} - {listing.get('price', '?')}")
        print(f"{data['count']} listings on page {data['page']}.\n")

    await service.aclose()
    print("Session ended.")


if __name__ == "__main__":
    asyncio.run(main())
