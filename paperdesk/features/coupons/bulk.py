"""
Bulk coupon import.

The import is a fold over the input rows: each step tries to create one
coupon and returns an updated BulkImportResult. A failing row is recorded
and the fold moves on, so one bad row never aborts its siblings. The coupon
creation function is a parameter, which keeps the fold free of provider
calls.
"""
from dataclasses import dataclass, replace
from functools import reduce
from typing import Any, Callable, Dict, Mapping, Sequence, Tuple

from pydantic import ValidationError as PydanticValidationError

from paperdesk.core.errors import ProviderError
from paperdesk.core.logging import log_event
from paperdesk.features.coupons.models import CouponParams, DomainCouponSpec, EmailCouponSpec


COUPON_SPECS = {
    "domain": DomainCouponSpec,
    "email": EmailCouponSpec,
}

CreateCoupon = Callable[[CouponParams], Any]


@dataclass(frozen=True)
class BulkRowError:
    row: int  # 1-based
    coupon: str
    error: str


@dataclass(frozen=True)
class BulkImportResult:
    created: int = 0
    failed: int = 0
    total: int = 0
    errors: Tuple[BulkRowError, ...] = ()

    def record_created(self) -> "BulkImportResult":
        return replace(self, created=self.created + 1)

    def record_failed(self, error: BulkRowError) -> "BulkImportResult":
        return replace(self, failed=self.failed + 1, errors=self.errors + (error,))

    def as_response(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"created": self.created, "failed": self.failed, "total": self.total}
        if self.errors:
            body["errors"] = [
                {"row": e.row, "coupon": e.coupon, "error": e.error} for e in self.errors
            ]
        return body


def _pydantic_message(exc: PydanticValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


def row_label(row: Any, index: int) -> str:
    name = row.get("name") if isinstance(row, Mapping) else None
    return str(name) if name else f"Row {index}"


def row_to_params(row: Any) -> CouponParams:
    """
    Turn one input row into coupon creation parameters.

    Raises:
        ValueError: On an unknown type discriminator or invalid fields
    """
    if not isinstance(row, Mapping):
        raise ValueError("Invalid coupon row: expected an object")
    coupon_type = row.get("type")
    spec_cls = COUPON_SPECS.get(coupon_type) if isinstance(coupon_type, str) else None
    if spec_cls is None:
        raise ValueError(f"Invalid coupon type: {coupon_type}")
    try:
        return spec_cls.model_validate(row).to_params()
    except PydanticValidationError as e:
        raise ValueError(_pydantic_message(e))


def _import_row(create: CreateCoupon) -> Callable[[BulkImportResult, Tuple[int, Any]], BulkImportResult]:
    def step(acc: BulkImportResult, indexed_row: Tuple[int, Any]) -> BulkImportResult:
        index, row = indexed_row
        try:
            create(row_to_params(row))
        except (ValueError, ProviderError) as e:
            message = e.message if isinstance(e, ProviderError) else str(e)
            log_event("warning", "coupon.bulk_row_failed", extra={"row": index, "error": message})
            return acc.record_failed(BulkRowError(row=index, coupon=row_label(row, index), error=message))
        return acc.record_created()

    return step


def fold_bulk_import(rows: Sequence[Any], create: CreateCoupon) -> BulkImportResult:
    start = BulkImportResult(total=len(rows))
    return reduce(_import_row(create), enumerate(rows, start=1), start)
