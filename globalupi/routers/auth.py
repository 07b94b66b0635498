from fastapi import APIRouter, Depends

from globalupi.models.account import LoginIn, SignupIn
from globalupi.routers.deps import get_account_service
from globalupi.services.accounts import AccountService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", summary="Register an account and issue a token")
def signup(
    payload: SignupIn, service: AccountService = Depends(get_account_service)
):
    result = service.signup(payload)
    return {
        "success": True,
        "message": "Account created successfully",
        "token": result.token,
        "user": result.user.model_dump(by_alias=True),
    }


@router.post("/login", summary="Exchange email and password for a token")
def login(payload: LoginIn, service: AccountService = Depends(get_account_service)):
    result = service.login(payload.email, payload.password)
    return {
        "success": True,
        "message": "Login successful",
        "token": result.token,
        "user": result.user.model_dump(by_alias=True),
    }
