from fastapi import APIRouter, Depends

from ..auth.security import SessionContext, require_role
from ..services.workspace import clear_all_data
from ..storage import StorageProvider, get_storage


router = APIRouter(prefix="/api/data", tags=["data"])


@router.delete("/clear-all")
def clear_all(
    storage: StorageProvider = Depends(get_storage),
    session: SessionContext = Depends(require_role("admin")),
):
    clear_all_data(storage, actor_id=session.user_id)
    return {"success": True, "message": "All data cleared successfully"}
