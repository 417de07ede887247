from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class DnsRecord(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    id: str
    name: str
    record_type: str = Field(alias="recordType")
    content: str = ""
    ttl: int = 600
    priority: int | None = None
    proxied: bool | None = None
    domain_id: str | None = Field(default=None, alias="domainId")


class RecordPage(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    items: list[DnsRecord] = Field(default_factory=list)
    total_count: int = Field(default=0, alias="totalCount")
    page: int = 1
    page_size: int | None = Field(default=None, alias="pageSize")
    has_more: bool | None = Field(default=None, alias="hasMore")
    next_cursor: int | None = Field(default=None, alias="nextCursor")

    def following_cursor(self) -> int:
        return self.next_cursor if self.next_cursor is not None else self.page + 1


class BatchDeleteFailure(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    record_id: str = Field(alias="recordId")
    reason: str = Field(default="", validation_alias=AliasChoices("reason", "message"))


class BatchDeleteResult(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    succeeded_ids: list[str] = Field(default_factory=list, alias="succeededIds")
    failed_ids: list[str] = Field(default_factory=list, alias="failedIds")
    failures: list[BatchDeleteFailure] = Field(default_factory=list)
    success_count: int | None = Field(default=None, alias="successCount")
    failed_count: int | None = Field(default=None, alias="failedCount")

    def reasons(self) -> dict[str, str]:
        return {failure.record_id: failure.reason for failure in self.failures if failure.reason}

    def confirmed_ids(self, requested: list[str] | tuple[str, ...]) -> list[str]:
        """Ids the server reports as deleted, in request order.

        Count-only results (`successCount` plus itemized `failures`) confirm
        every requested id that is not listed as failed. Without either an id
        list or a count nothing is confirmed.
        """
        if "succeeded_ids" in self.model_fields_set:
            confirmed = set(self.succeeded_ids)
            return [record_id for record_id in requested if record_id in confirmed]
        if self.success_count is None:
            return []
        failed = set(self.failed_ids) | {failure.record_id for failure in self.failures}
        return [record_id for record_id in requested if record_id not in failed]
