#!/usr/bin/env python3
"""Insert the sample portfolio/blog/gallery/videos/testimonials into empty collections."""
from __future__ import annotations

from realty_api.core.config import get_settings
from realty_api.repositories import build_backend
from realty_api.services.content_service import ContentService


def main() -> None:
    backend = build_backend(get_settings())
    backend.initialize()
    try:
        seeded = ContentService(backend).seed_demo()
    finally:
        backend.close()
    if not seeded:
        print("Nothing to seed: collections already have content.")
    for name, count in seeded.items():
        print(f"  {name}: +{count}")


if __name__ == "__main__":
    main()
