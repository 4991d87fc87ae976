from fastapi import APIRouter, Depends
from search_server.app.api.deps import get_catalog

router = APIRouter(prefix="/health", tags=["health"])

@router.get("")
def health(catalog=Depends(get_catalog)):
    return {"ok": True, "products": len(catalog)}
