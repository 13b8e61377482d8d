from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..auth.security import ADMIN_ROLES, require_authenticated, require_role
from ..schemas.team import TeamMember, TeamMemberCreate, TeamMemberUpdate
from ..storage import DuplicateRecordError, StorageProvider, get_storage


router = APIRouter(prefix="/api/team-members", tags=["team"])


@router.get("", response_model=List[TeamMember])
def list_team_members(storage: StorageProvider = Depends(get_storage), _=Depends(require_authenticated)):
    return storage.list_team_members()


@router.post("", response_model=TeamMember, status_code=status.HTTP_201_CREATED)
def create_team_member(
    payload: TeamMemberCreate,
    storage: StorageProvider = Depends(get_storage),
    _=Depends(require_role(*ADMIN_ROLES)),
):
    try:
        return storage.create_team_member(payload.model_dump())
    except DuplicateRecordError:
        raise HTTPException(status_code=409, detail="A team member with this email already exists")


@router.put("/{member_id}", response_model=TeamMember)
def update_team_member(
    member_id: int,
    payload: TeamMemberUpdate,
    storage: StorageProvider = Depends(get_storage),
    _=Depends(require_role("admin")),
):
    try:
        member = storage.update_team_member(member_id, payload.model_dump(exclude_unset=True))
    except DuplicateRecordError:
        raise HTTPException(status_code=409, detail="A team member with this email already exists")
    if not member:
        raise HTTPException(status_code=404, detail="Team member not found")
    return member


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_team_member(
    member_id: int,
    storage: StorageProvider = Depends(get_storage),
    _=Depends(require_role("admin")),
):
    # Tasks assigned to the member keep the dangling assignee id
    if not storage.delete_team_member(member_id):
        raise HTTPException(status_code=404, detail="Team member not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
