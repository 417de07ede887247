from __future__ import annotations

from dataclasses import dataclass, field

from dns_control.app.infrastructure.logging.logger import get_logger, log_action
from dns_control.app.record_cache import RecordCacheStore
from dns_control.app.selection import SelectionController
from dns_control.app.signal import Signal
from dns_control.app.state import RecordCacheKey
from dns_control.clients.dns_client_sdk.exceptions import ApiError, PartialBatchFailure
from dns_control.clients.dns_client_sdk.records_client import RecordsClient

logger = get_logger(__name__)


@dataclass(frozen=True)
class BatchDeleteOutcome:
    requested: tuple[str, ...]
    succeeded: tuple[str, ...] = ()
    failed: tuple[str, ...] = ()
    reasons: dict[str, str] = field(default_factory=dict)

    @property
    def failure_count(self) -> int:
        return len(self.failed)

    @property
    def is_partial(self) -> bool:
        return bool(self.failed)

    def as_error(self) -> PartialBatchFailure | None:
        if not self.failed:
            return None
        return PartialBatchFailure(
            code="PARTIAL_BATCH_FAILURE",
            message=f"{len(self.failed)} of {len(self.requested)} records could not be deleted.",
            details={"failed_ids": list(self.failed)},
            succeeded_ids=self.succeeded,
            failed_ids=self.failed,
            reasons=dict(self.reasons),
        )


class BatchMutationCoordinator:
    """Batch delete over the selection snapshot.

    Local state changes only for ids the remote side confirmed; failed ids stay
    selected so the operator can retry them. Nothing is retried automatically.
    """

    def __init__(self, client: RecordsClient, store: RecordCacheStore, selection: SelectionController) -> None:
        self.client = client
        self.store = store
        self.selection = selection
        self.in_flight: RecordCacheKey | None = None
        self.changed = Signal()

    @property
    def is_running(self) -> bool:
        return self.in_flight is not None

    async def batch_delete(self, key: RecordCacheKey) -> BatchDeleteOutcome | None:
        if self.in_flight is not None or self.selection.key != key:
            return None
        requested = tuple(self.selection.ordered_selection())
        if not requested:
            return None

        self.in_flight = key
        self.changed.emit()
        try:
            result = await self.client.batch_delete_records(key.account_id, key.domain_id, list(requested))
        except ApiError as error:
            log_action(
                logger,
                module="records",
                action="batch_delete",
                account_id=key.account_id,
                domain_id=key.domain_id,
                trace_id=error.trace_id,
                outcome="error",
                requested=len(requested),
            )
            raise
        finally:
            self.in_flight = None
            self.changed.emit()

        succeeded = tuple(result.confirmed_ids(requested))
        confirmed = set(succeeded)
        # Ids the response does not confirm stay in the cache.
        failed = tuple(record_id for record_id in requested if record_id not in confirmed)
        outcome = BatchDeleteOutcome(requested=requested, succeeded=succeeded, failed=failed, reasons=result.reasons())

        self.store.remove_many_locally(key, list(succeeded))
        if self.selection.key == key:
            self.selection.discard(list(succeeded))
            if not failed:
                self.selection.exit_select_mode()

        log_action(
            logger,
            module="records",
            action="batch_delete",
            account_id=key.account_id,
            domain_id=key.domain_id,
            trace_id=None,
            outcome="partial" if failed else "success",
            succeeded=len(succeeded),
            failed=len(failed),
        )
        return outcome
