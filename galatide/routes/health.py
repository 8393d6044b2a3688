from fastapi import APIRouter, Depends

from galatide import __version__
from galatide.database import Store, get_store
from galatide.exceptions import StoreUnavailableError

router = APIRouter(prefix="/api/health", tags=["Health"])


@router.get("")
async def health_check(store: Store = Depends(get_store)):
    """Always 200; reports whether the database is reachable."""
    if not store.is_configured():
        database = "not_configured"
    else:
        try:
            await store.ensure_connected()
            database = "connected"
        except StoreUnavailableError:
            database = "unavailable"

    return {
        "status": "ok" if database == "connected" else "degraded",
        "database": database,
        "version": __version__,
    }
