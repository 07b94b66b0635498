from typing import Optional

from fastapi import APIRouter, Depends, Query

from globalupi.core.security import Session, get_session
from globalupi.db.dal import Database
from globalupi.models.transaction import TransactionOut
from globalupi.routers.deps import get_db

router = APIRouter(prefix="/api", tags=["transactions"])


@router.get("/transactions", summary="Transaction history, newest first")
def list_transactions(
    type: Optional[str] = Query(
        None, description="Filter by kind: sent | received | conversion | all"
    ),
    session: Session = Depends(get_session),
    db: Database = Depends(get_db),
):
    history = db.list_transactions(session.account_id, type)
    return {
        "success": True,
        "transactions": [TransactionOut(**row).model_dump() for row in history],
    }
