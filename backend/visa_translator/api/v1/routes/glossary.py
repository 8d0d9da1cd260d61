"""Glossary inspection and reload routes."""

import logging

from fastapi import APIRouter

from visa_translator.api.dependencies import RequireAuth, Vocabularies

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/glossary")
async def get_glossary_summary(_: RequireAuth, store: Vocabularies):
    """Report per-category term counts of the loaded glossary."""
    vocabulary = store.load()
    return {
        "loaded": store.is_loaded,
        "total": len(vocabulary),
        "categories": vocabulary.category_counts(),
    }


@router.post("/glossary/reload")
async def reload_glossary(_: RequireAuth, store: Vocabularies):
    """Re-read the glossary file, replacing the cached vocabulary."""
    vocabulary = store.reload()
    logger.info("Glossary reloaded: %d terms", len(vocabulary))
    return {
        "loaded": store.is_loaded,
        "total": len(vocabulary),
        "categories": vocabulary.category_counts(),
    }
