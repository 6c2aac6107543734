"""Request field types shared by several routers."""
from typing import Annotated

from pydantic import AfterValidator, StringConstraints

from paperdesk.features.coupons.resolver import email_domain


def _require_domain(value: str) -> str:
    email_domain(value)
    return value


# An address the discount rules can be applied to: non-empty, contains '@'
RequesterEmail = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=3),
    AfterValidator(_require_domain),
]

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
