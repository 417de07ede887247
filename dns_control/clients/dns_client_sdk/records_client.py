from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as ModelValidationError

from .exceptions import RemoteRejection
from .models import BatchDeleteResult, RecordPage
from .transport import Transport

LIST_RECORDS = "list_records"
DELETE_RECORD = "delete_record"
BATCH_DELETE_RECORDS = "batch_delete_records"
IS_RESTORE_COMPLETED = "is_restore_completed"

ModelT = TypeVar("ModelT", bound=BaseModel)


def _parse(model: type[ModelT], command: str, payload: Any) -> ModelT:
    try:
        return model.model_validate(payload or {})
    except ModelValidationError as exc:
        raise RemoteRejection(
            code="INVALID_RESPONSE",
            message=f"Malformed {command} response: {exc.error_count()} validation error(s)",
            details=exc.errors(include_url=False),
            raw_payload=payload,
        ) from exc


class RecordsClient:
    def __init__(self, transport: Transport, page_size: int = 20) -> None:
        self.transport = transport
        self.page_size = max(1, page_size)

    async def list_records(
        self,
        account_id: str,
        domain_id: str,
        *,
        keyword: str | None = None,
        record_type: str | None = None,
        cursor: int | None = None,
    ) -> RecordPage:
        requested_page = cursor or 1
        args: dict[str, Any] = {
            "accountId": account_id,
            "domainId": domain_id,
            "page": requested_page,
            "pageSize": self.page_size,
        }
        if keyword:
            args["keyword"] = keyword
        if record_type:
            args["recordType"] = record_type
        payload = await self.transport.call(LIST_RECORDS, args)
        page = _parse(RecordPage, LIST_RECORDS, payload)
        # Servers that do not echo the page number still advance from the one asked for.
        if "page" not in page.model_fields_set:
            page.page = requested_page
        if page.page_size is None:
            page.page_size = self.page_size
        return page

    async def delete_record(self, account_id: str, record_id: str, domain_id: str) -> None:
        await self.transport.call(
            DELETE_RECORD,
            {"accountId": account_id, "recordId": record_id, "domainId": domain_id},
        )

    async def batch_delete_records(self, account_id: str, domain_id: str, record_ids: list[str]) -> BatchDeleteResult:
        payload = await self.transport.call(
            BATCH_DELETE_RECORDS,
            {"accountId": account_id, "domainId": domain_id, "recordIds": list(record_ids)},
        )
        return _parse(BatchDeleteResult, BATCH_DELETE_RECORDS, payload)

    async def is_restore_completed(self) -> bool:
        return bool(await self.transport.call(IS_RESTORE_COMPLETED))
