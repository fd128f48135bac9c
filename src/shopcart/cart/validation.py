"""Cart content validation against live catalogue state.

Validation is a read-only query: it never changes the cart, and it always
asks the catalogue again, so a report only describes the moment it was
produced. Callers validate right before they act on the result (for
example immediately before checkout) rather than keeping reports around.

A failing check is a business outcome reported to the caller, never an
exception. Only a catalogue outage raises.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from shopcart.catalogue.port import CatalogueLookup
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)


class CheckReason(Enum):
    PRODUCT_NOT_FOUND = "product_not_found"
    PRODUCT_DISABLED = "product_disabled"
    EXCEEDS_MAX_UNITS = "exceeds_max_units"
    BELOW_MIN_UNITS = "below_min_units"
    INSUFFICIENT_STOCK = "insufficient_stock"
    SHIPPING_OPTION_DISABLED = "shipping_option_disabled"
    PAYMENT_METHOD_DISABLED = "payment_method_disabled"


class ItemCheck(BaseModel):
    """Outcome of checking one cart line, or one selection on the cart."""

    model_config = ConfigDict(frozen=True)

    subject: str  # "item", "shipping_option" or "payment_method"
    subject_id: str
    product_id: str | None = None
    units: int | None = None
    allowed_units: int | None = None
    reasons: tuple[CheckReason, ...] = ()

    @property
    def passed(self) -> bool:
        return not self.reasons


class ValidationReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    checks: tuple[ItemCheck, ...] = ()

    @property
    def check_failed(self) -> bool:
        return any(not check.passed for check in self.checks)

    @property
    def failures(self) -> tuple[ItemCheck, ...]:
        return tuple(check for check in self.checks if not check.passed)

    def failed_item_ids(self) -> list[str]:
        return [check.subject_id for check in self.failures if check.subject == "item"]

    def __add__(self, other: "ValidationReport") -> "ValidationReport":
        return ValidationReport(checks=self.checks + other.checks)


class CartValidator:
    """Checks cart lines and selections against the catalogue."""

    def __init__(self, catalogue: CatalogueLookup) -> None:
        self.catalogue = catalogue

    def check_item(self, item) -> ItemCheck:
        entry = self.catalogue.resolve(item.product_id)

        if entry is None:
            return ItemCheck(
                subject="item",
                subject_id=item.id,
                product_id=item.product_id,
                units=item.units,
                reasons=(CheckReason.PRODUCT_NOT_FOUND,),
            )

        reasons = []
        if not entry.sellable:
            reasons.append(CheckReason.PRODUCT_DISABLED)
        if entry.max_units is not None and item.units > entry.max_units:
            reasons.append(CheckReason.EXCEEDS_MAX_UNITS)
        if item.units < entry.min_units:
            reasons.append(CheckReason.BELOW_MIN_UNITS)
        if entry.available_units is not None and item.units > entry.available_units:
            reasons.append(CheckReason.INSUFFICIENT_STOCK)

        return ItemCheck(
            subject="item",
            subject_id=item.id,
            product_id=item.product_id,
            units=item.units,
            allowed_units=entry.allowed_units,
            reasons=tuple(reasons),
        )

    def validate_content(self, items) -> ValidationReport:
        """Check every line: product still sellable, unit count within limits."""
        return ValidationReport(checks=tuple(self.check_item(item) for item in items))

    def validate_selections(self, shipping_option=None, payment_method=None) -> ValidationReport:
        checks = []
        if shipping_option is not None:
            checks.append(
                ItemCheck(
                    subject="shipping_option",
                    subject_id=shipping_option.id,
                    reasons=() if shipping_option.enabled else (CheckReason.SHIPPING_OPTION_DISABLED,),
                )
            )
        if payment_method is not None:
            checks.append(
                ItemCheck(
                    subject="payment_method",
                    subject_id=payment_method.id,
                    reasons=() if payment_method.enabled else (CheckReason.PAYMENT_METHOD_DISABLED,),
                )
            )
        return ValidationReport(checks=tuple(checks))

    def validate(self, cart) -> ValidationReport:
        """Full cart check: content plus the selected shipping and payment options."""
        report = self.validate_content(cart.items) + self.validate_selections(
            cart.shipping_option, cart.payment_method
        )

        if report.check_failed:
            logger.info(
                "Cart validation failed",
                cart_id=cart.id,
                failures=[
                    {"subject_id": check.subject_id, "reasons": [r.value for r in check.reasons]}
                    for check in report.failures
                ],
            )
        return report
