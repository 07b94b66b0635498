from fastapi import APIRouter, Depends

from globalupi.core.security import Session, get_session
from globalupi.db.dal import Database
from globalupi.models.investment import InvestmentIn
from globalupi.routers.deps import get_db

router = APIRouter(prefix="/api/investments", tags=["investments"])


@router.get("", summary="List investments of the logged-in account")
def list_investments(
    session: Session = Depends(get_session), db: Database = Depends(get_db)
):
    return {"success": True, "investments": db.list_investments(session.account_id)}


@router.post("", summary="Add an investment holding")
def add_investment(
    payload: InvestmentIn,
    session: Session = Depends(get_session),
    db: Database = Depends(get_db),
):
    investment_id = db.add_investment(
        session.account_id,
        symbol=payload.symbol,
        name=payload.name,
        type_=payload.type,
        quantity=payload.quantity,
        current_price=payload.current_price,
        performance=payload.performance,
    )
    return {
        "success": True,
        "message": "Investment added successfully",
        "investmentId": investment_id,
    }
