"""Supabase connection backing the datastore gateways."""

import logging
from functools import lru_cache
from typing import Optional

from supabase import Client, create_client

from ..config import settings

logger = logging.getLogger(__name__)


@lru_cache()
def get_supabase_client() -> Optional[Client]:
    """Client for the configured project, or ``None`` when it cannot be built.

    Building the client does not contact Supabase; connection problems
    surface on the first query as ``UpstreamError``.
    """
    url, key = settings.supabase_url, settings.supabase_key
    if not url or not key:
        logger.warning("Supabase is not configured; set MONTAROTA_SUPABASE_URL and MONTAROTA_SUPABASE_KEY")
        return None

    try:
        client = create_client(url, key)
    except Exception as exc:
        logger.error(f"Could not create the Supabase client for {url}: {exc}")
        return None
    logger.info(f"Supabase client ready for {url}")
    return client
