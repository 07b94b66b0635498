from fastapi import APIRouter, Depends

from globalupi.core.security import Session, get_session
from globalupi.models.conversion import ConversionOut, ConvertIn
from globalupi.routers.deps import get_conversion_service
from globalupi.services.conversion import ConversionService

router = APIRouter(prefix="/api", tags=["converter"])


@router.post("/converter", summary="Quote a currency conversion (balances unchanged)")
def convert(
    payload: ConvertIn,
    session: Session = Depends(get_session),
    service: ConversionService = Depends(get_conversion_service),
):
    result = service.convert(
        session.account_id,
        payload.from_amount,
        payload.from_currency,
        payload.to_currency,
    )
    out = ConversionOut(
        from_amount=result.from_amount,
        from_currency=result.from_currency,
        to_amount=result.to_amount,
        to_currency=result.to_currency,
        rate=result.rate,
    )
    return out.model_dump(mode="json", by_alias=True)
