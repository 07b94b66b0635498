"""Shared FastAPI dependencies.

Settings live on `app.state` so that an app built with a settings override
(e.g. a temp database in tests) is used consistently by every route.
"""

from fastapi import Depends, Request

from globalupi.core.config import Settings
from globalupi.db.dal import Database
from globalupi.services.accounts import AccountService
from globalupi.services.conversion import ConversionService
from globalupi.services.transfer import TransferService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(settings: Settings = Depends(get_app_settings)) -> Database:
    return Database(settings.db_path, timeout=settings.sqlite_timeout_seconds)


def get_account_service(
    db: Database = Depends(get_db), settings: Settings = Depends(get_app_settings)
) -> AccountService:
    return AccountService(db, settings)


def get_transfer_service(
    db: Database = Depends(get_db), settings: Settings = Depends(get_app_settings)
) -> TransferService:
    return TransferService(db, reference_prefix=settings.transaction_ref_prefix)


def get_conversion_service(db: Database = Depends(get_db)) -> ConversionService:
    return ConversionService(db)
