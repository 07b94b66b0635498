from fastapi import APIRouter, Depends

from globalupi.core.security import Session, get_session
from globalupi.models.transaction import SendMoneyIn, SendMoneyOut
from globalupi.routers.deps import get_transfer_service
from globalupi.services.transfer import TransferService

router = APIRouter(prefix="/api", tags=["send-money"])


@router.post("/send-money", summary="Send money to an external recipient")
def send_money(
    payload: SendMoneyIn,
    session: Session = Depends(get_session),
    service: TransferService = Depends(get_transfer_service),
):
    result = service.send_money(
        session.account_id,
        payload.recipient(),
        payload.amount,
        payload.currency,
        payload.message,
    )
    out = SendMoneyOut(
        transaction_id=result.transaction_id, new_balance=result.new_balance
    )
    return out.model_dump(by_alias=True)
