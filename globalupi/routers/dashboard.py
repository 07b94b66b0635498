from fastapi import APIRouter, Depends

from globalupi.core.security import Session, get_session
from globalupi.models.account import Balances
from globalupi.routers.deps import get_account_service
from globalupi.services.accounts import AccountService

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/balance", summary="Current balances in INR, USD and EUR")
def balance(
    session: Session = Depends(get_session),
    service: AccountService = Depends(get_account_service),
):
    balances = Balances(**service.balances(session.account_id))
    return {"success": True, "balances": balances.model_dump()}


@router.get("/user", summary="Profile of the logged-in account")
def user(
    session: Session = Depends(get_session),
    service: AccountService = Depends(get_account_service),
):
    profile = service.profile(session.account_id)
    return {
        "success": True,
        "user": profile.model_dump(include={"id", "name", "email", "phone"}),
    }
