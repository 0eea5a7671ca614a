#!/usr/bin/env python3
"""
DocRegistry Demo Application

Walks through the add / search / delete flow against a DocumentStore built
from the current settings (in-memory unless STORE_BACKEND=sqlite).
"""

import logging
import sys

# Setup basic logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger("main")

try:
    from docregistry import DocRegistryError, DocumentStore, load_settings
except ImportError as e:
    import traceback
    traceback.print_exc()
    logger.error(f"Failed to import docregistry components: {e}")
    sys.exit(1)


def main():
    logger.info("Starting DocRegistry Demo")

    settings = load_settings()
    with DocumentStore.from_settings(settings) as store:
        # 1. Insert
        doc = store.add_document("Invoice", "Q1 report")
        store.add_document("Contract", "Supplier agreement")
        logger.info(f"Added {doc.name!r} as {doc.id}")

        # 2. Search
        for keyword in ("Inv", "zzz"):
            matches = store.find_documents(keyword)
            logger.info(f"Search {keyword!r}: {[d.name for d in matches]}")

        # 3. Errors are values the caller can inspect
        try:
            store.find_documents("")
        except DocRegistryError as e:
            logger.info(f"Rejected empty search: {e.to_dict()}")

        # 4. Delete
        removed = store.delete_document(doc.id)
        logger.info(f"Deleted {removed.name!r}; {store.count()} document(s) left")

    logger.info("Demo complete!")


if __name__ == "__main__":
    main()
