"""Time-based expiry of stored files."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from pdfmerger import logger

if TYPE_CHECKING:
    from pdfmerger.storage import UploadStore


async def delete_after(store: UploadStore, filename: str, delay_seconds: float) -> None:
    """Delete a stored file once `delay_seconds` have elapsed.

    Args:
        store: Upload store.
        filename: Stored name.
        delay_seconds: Delay before deletion.
    """
    if delay_seconds > 0:
        await asyncio.sleep(delay_seconds)
    if store.discard(filename):
        logger.info("Downloaded file removed", extra={"stored_name": filename})


async def sweep_once(store: UploadStore, max_age_seconds: float) -> list[str]:
    """Run one expiry sweep off the event loop.

    Returns:
        list[str]: Names of the deleted files.
    """
    return await asyncio.to_thread(store.sweep_expired, max_age_seconds)


async def sweep_periodically(
    store: UploadStore,
    *,
    interval_seconds: float,
    max_age_seconds: float,
) -> None:
    """Sweep expired files every `interval_seconds` until cancelled.

    Args:
        store: Upload store.
        interval_seconds: Delay between sweeps; the first sweep runs after one interval.
        max_age_seconds: Files older than this are deleted.
    """
    logger.info(
        "Expiry sweep scheduled",
        extra={"interval_seconds": interval_seconds, "max_age_seconds": max_age_seconds},
    )
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            removed = await sweep_once(store, max_age_seconds)
        except Exception:
            logger.exception("Expiry sweep failed")
            continue
        logger.info("Expiry sweep completed", extra={"removed": len(removed)})
