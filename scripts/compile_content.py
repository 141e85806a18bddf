#!/usr/bin/env python3
"""
compile_content.py - Validate lesson documents and write the content index.

Loads every document under the content directory, reports the ones that
fail validation, and writes the listing index (slug, title, description,
category) used by index and search pages.

Usage:
  python scripts/compile_content.py
  python scripts/compile_content.py --content data/content --index-output data/content-index.json
  python scripts/compile_content.py --strict
"""

import argparse
import json
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from learnhub.classroom import ContentRepository, ListingService, list_progress_items
from learnhub.config import get_settings
from learnhub.log import setup_logging

logger = logging.getLogger(__name__)


def compute_stats(repository: ContentRepository) -> dict:
    """Summary statistics for the loaded content."""
    documents = repository.load_all()
    return {
        "total_documents": len(documents),
        "rejected_documents": len(repository.load_errors),
        "categories": repository.list_categories(),
        "total_sections": sum(len(doc.sections) for doc in documents),
        "total_blocks": sum(doc.block_count for doc in documents),
        "total_questions": sum(len(doc.test_questions) for doc in documents),
        "total_progress_items": sum(len(list_progress_items(doc)) for doc in documents),
    }


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Validate content documents and write the content index",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--content",
        type=Path,
        default=settings.content_dir,
        help="Path to content directory"
    )
    parser.add_argument(
        "--index-output",
        type=Path,
        default=None,
        help="Output path for index JSON (default: <content>/../content-index.json)"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any document is rejected"
    )

    args = parser.parse_args()
    setup_logging(settings.log_level)

    logger.info(f"Loading content from {args.content}...")
    try:
        repository = ContentRepository(args.content)
    except FileNotFoundError as e:
        logger.error(str(e))
        sys.exit(1)

    documents = repository.load_all()
    errors = repository.load_errors

    if errors:
        logger.warning(f"Rejected {len(errors)} documents:")
        for error in errors[:10]:
            logger.warning(f"  - {error}")
        if len(errors) > 10:
            logger.warning(f"  ... and {len(errors) - 10} more")
    else:
        logger.info("  All documents passed validation!")

    listing = ListingService(repository)
    index = listing.to_index(listing.list_summaries())
    index_path = args.index_output or args.content.parent / "content-index.json"
    with open(index_path, "w", encoding="utf-8") as f:
        json.dump(index, f, indent=2, ensure_ascii=False)
    logger.info(f"Saved index to: {index_path}")

    stats = compute_stats(repository)

    logger.info("\n" + "=" * 50)
    logger.info("CONTENT COMPILED")
    logger.info("=" * 50)
    logger.info(f"Documents: {stats['total_documents']} ({stats['rejected_documents']} rejected)")
    logger.info(f"Categories: {', '.join(stats['categories']) or '-'}")
    logger.info(f"Sections: {stats['total_sections']}")
    logger.info(f"Blocks: {stats['total_blocks']}")
    logger.info(f"Questions: {stats['total_questions']}")
    logger.info(f"Progress items: {stats['total_progress_items']}")

    if args.strict and errors:
        sys.exit(1)
    return documents


if __name__ == "__main__":
    main()
