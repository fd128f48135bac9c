"""Shopping Cart aggregate: the mutable working set of one shopping session.

The cart tracks line items, the coupon code, addresses and the shipping and
payment selections, and re-derives its totals from the pricing, tax and
shipping rules after every change. It is owned by a single session and is
not meant to be mutated from several threads at once.

All collaborators (catalogue, rule providers, repository, contacts,
activity log) are handed to `ShoppingCart.create`; the cart never looks
them up from global state.

Mutations are all-or-nothing: if a collaborator fails while the new totals
are being derived, the cart is put back exactly as it was before the call
and the error is raised to the caller.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String
from pydantic import PrivateAttr

from shopcart.activity.port import Activity, ActivityLog, ActivityType
from shopcart.cart.addresses import CustomerAddress
from shopcart.cart.coupons import is_usable_coupon, normalize_coupon_code
from shopcart.cart.customer import Customer, User
from shopcart.cart.events import (
    CartCleared,
    CartCouponApplied,
    CartCouponCleared,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
    CartSaved,
)
from shopcart.cart.options import PaymentMethod, ShippingOption
from shopcart.cart.snapshot import CartSnapshot, LineSnapshot
from shopcart.cart.totals import CartTotals, calculate_totals
from shopcart.cart.validation import CartValidator, ValidationReport
from shopcart.catalogue.port import CatalogueEntry, CatalogueLookup
from shopcart.contacts.port import ContactResolver
from shopcart.domain import shopcart
from shopcart.exceptions import (
    CatalogueUnavailableError,
    ContactSyncError,
    PersistenceError,
    PricingUnavailableError,
    translate_errors,
)
from shopcart.persistence.port import CartRepository, CartState, SaveResult
from shopcart.pricing.port import PricingRuleProvider
from shopcart.shipping.port import ShippingRateProvider
from shopcart.tax.port import TaxRuleProvider
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)

# Line attributes that change after a line is created
_LINE_STATE = ("name", "units", "unit_price", "discount", "requires_shipping", "taxable", "weight")


@shopcart.entity(part_of="ShoppingCart")
class LineItem:
    """One product in the cart with its unit count.

    Name, price and the shipping/tax flags are captured from the catalogue
    when the product is added, and refreshed whenever the same product is
    added again. `discount` is the per-item discount for the whole line as
    of the last recalculation.
    """

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    units = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    discount = Float(default=0.0, min_value=0.0)
    requires_shipping = Boolean(default=True)
    taxable = Boolean(default=False)
    weight = Float(default=0.0, min_value=0.0)
    added_at = DateTime()

    @classmethod
    def from_entry(cls, entry: CatalogueEntry, units: int) -> "LineItem":
        return cls(
            product_id=str(entry.product_id),
            name=entry.name,
            units=units,
            unit_price=entry.unit_price,
            requires_shipping=entry.requires_shipping,
            taxable=entry.taxable,
            weight=entry.weight,
            added_at=datetime.now(UTC),
        )

    def refresh_from(self, entry: CatalogueEntry) -> None:
        self.name = entry.name
        self.unit_price = entry.unit_price
        self.requires_shipping = entry.requires_shipping
        self.taxable = entry.taxable
        self.weight = entry.weight

    @property
    def subtotal(self) -> float:
        return round(self.unit_price * self.units, 2)

    @property
    def net_subtotal(self) -> float:
        return round(max(self.unit_price * self.units - self.discount, 0.0), 2)

    def to_snapshot(self) -> LineSnapshot:
        return LineSnapshot(
            item_id=str(self.id),
            product_id=str(self.product_id),
            name=self.name,
            units=self.units,
            unit_price=self.unit_price,
            requires_shipping=self.requires_shipping,
            taxable=self.taxable,
            weight=self.weight,
        )


@dataclass(frozen=True)
class _Memento:
    items: list
    item_state: dict
    coupon_code: str | None
    billing_address: CustomerAddress | None
    shipping_address: CustomerAddress | None
    shipping_option: ShippingOption | None
    payment_method: PaymentMethod | None
    totals: CartTotals
    updated_at: datetime


@shopcart.aggregate
class ShoppingCart:
    currency = String(max_length=3, default="USD")
    items = HasMany(LineItem)
    created_at = DateTime()
    updated_at = DateTime()

    _catalogue: Any = PrivateAttr(default=None)
    _pricing: Any = PrivateAttr(default=None)
    _tax: Any = PrivateAttr(default=None)
    _shipping_rates: Any = PrivateAttr(default=None)
    _repository: Any = PrivateAttr(default=None)
    _contacts: Any = PrivateAttr(default=None)
    _activity_log: Any = PrivateAttr(default=None)
    _validator: Any = PrivateAttr(default=None)
    _user: Any = PrivateAttr(default=None)
    _customer: Any = PrivateAttr(default=None)
    _coupon_code: Any = PrivateAttr(default=None)
    _billing_address: Any = PrivateAttr(default=None)
    _shipping_address: Any = PrivateAttr(default=None)
    _shipping_option: Any = PrivateAttr(default=None)
    _payment_method: Any = PrivateAttr(default=None)
    _totals: Any = PrivateAttr(default=None)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        *,
        catalogue: CatalogueLookup,
        pricing: PricingRuleProvider,
        tax: TaxRuleProvider,
        shipping: ShippingRateProvider,
        repository: CartRepository | None = None,
        contacts: ContactResolver | None = None,
        activity_log: ActivityLog | None = None,
        user: User | None = None,
        customer: Customer | None = None,
        currency: str = "USD",
        cart_id: str | None = None,
    ) -> "ShoppingCart":
        """Create an empty cart wired to its collaborators."""
        missing = [
            name
            for name, collaborator in (
                ("catalogue", catalogue),
                ("pricing", pricing),
                ("tax", tax),
                ("shipping", shipping),
            )
            if collaborator is None
        ]
        if missing:
            raise ValidationError({name: ["is required"] for name in missing})

        now = datetime.now(UTC)
        values = {"currency": currency, "items": [], "created_at": now, "updated_at": now}
        if cart_id is not None:
            values["id"] = cart_id
        cart = cls(**values)

        cart._catalogue = catalogue
        cart._pricing = pricing
        cart._tax = tax
        cart._shipping_rates = shipping
        cart._repository = repository
        cart._contacts = contacts
        cart._activity_log = activity_log
        cart._validator = CartValidator(catalogue)
        cart._user = user
        cart._customer = customer
        cart._totals = CartTotals(currency=currency)
        return cart

    # -------------------------------------------------------------------
    # Collaborators
    # -------------------------------------------------------------------
    @property
    def catalogue(self) -> CatalogueLookup:
        return self._catalogue

    @property
    def pricing(self) -> PricingRuleProvider:
        return self._pricing

    @property
    def tax(self) -> TaxRuleProvider:
        return self._tax

    @property
    def shipping_rates(self) -> ShippingRateProvider:
        return self._shipping_rates

    @property
    def repository(self) -> CartRepository | None:
        return self._repository

    @property
    def contacts(self) -> ContactResolver | None:
        return self._contacts

    @property
    def activity_log(self) -> ActivityLog | None:
        return self._activity_log

    # -------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------
    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def totals(self) -> CartTotals:
        return self._totals

    @property
    def subtotal(self) -> float:
        """Sum of line subtotals after per-item discounts."""
        return self._totals.subtotal

    @property
    def order_discount(self) -> float:
        return self._totals.order_discount

    @property
    def total_discount(self) -> float:
        return self._totals.total_discount

    @property
    def total_tax(self) -> float:
        return self._totals.tax

    @property
    def shipping(self) -> float:
        return self._totals.shipping

    @property
    def total_price(self) -> float:
        return self._totals.total

    @property
    def is_shipping_needed(self) -> bool:
        return any(item.requires_shipping for item in self.items)

    @property
    def has_usable_coupon(self) -> bool:
        if self._coupon_code is None:
            return False
        with translate_errors(PricingUnavailableError):
            return is_usable_coupon(self._pricing, self._snapshot(discounted=True))

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def get_item(self, item_id: str) -> LineItem | None:
        return next((i for i in self.items if str(i.id) == str(item_id)), None)

    def _find_by_product(self, product_id: str) -> LineItem | None:
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def add_item(self, product_id, units: int = 1) -> LineItem | None:
        """Add `units` of a product, or top up the line already holding it.

        Unknown products and non-positive unit counts are ignored and
        return None.
        """
        if units is None or units <= 0:
            logger.debug("Ignoring non-positive units", cart_id=str(self.id), product_id=str(product_id), units=units)
            return None

        with translate_errors(CatalogueUnavailableError):
            entry = self._catalogue.resolve(str(product_id))
        if entry is None:
            logger.info("Unknown product not added to cart", cart_id=str(self.id), product_id=str(product_id))
            return None

        with self._atomic():
            item = self._find_by_product(entry.product_id)
            if item:
                item.units += units
                item.refresh_from(entry)
            else:
                item = LineItem.from_entry(entry, units)
                self.add_items(item)

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(item.product_id),
                units=units,
            )
        )
        self._log_activity(ActivityType.PRODUCT_ADDED_TO_CART, item, units)
        logger.info(
            "Item added to cart",
            cart_id=str(self.id),
            item_id=str(item.id),
            product_id=str(item.product_id),
            units=units,
            line_units=item.units,
        )
        return item

    def update_quantity(self, item_id: str, units: int) -> None:
        """Set the unit count of a line; zero or less removes the line."""
        item = self.get_item(item_id)
        if item is None:
            logger.debug("Ignoring update of unknown cart item", cart_id=str(self.id), item_id=str(item_id))
            return

        if units <= 0:
            self.remove_item(item_id)
            return

        previous_units = item.units
        with self._atomic():
            item.units = units

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item.id),
                previous_units=previous_units,
                new_units=units,
            )
        )
        logger.info("Cart item quantity updated", cart_id=str(self.id), item_id=str(item.id), units=units)

    def remove_item(self, item_id: str) -> None:
        item = self.get_item(item_id)
        if item is None:
            logger.debug("Ignoring removal of unknown cart item", cart_id=str(self.id), item_id=str(item_id))
            return

        with self._atomic():
            self.remove_items(item)

        self.raise_(CartItemRemoved(cart_id=str(self.id), item_id=str(item.id), product_id=str(item.product_id)))
        self._log_activity(ActivityType.PRODUCT_REMOVED_FROM_CART, item, item.units)
        logger.info(
            "Item removed from cart", cart_id=str(self.id), item_id=str(item.id), product_id=str(item.product_id)
        )

    def remove_all_items(self) -> None:
        removed = list(self.items)

        with self._atomic():
            if removed:
                self.remove_items(removed)

        for item in removed:
            self._log_activity(ActivityType.PRODUCT_REMOVED_FROM_CART, item, item.units)
        if removed:
            self.raise_(CartCleared(cart_id=str(self.id), items_removed_count=len(removed)))
        logger.info("Cart cleared", cart_id=str(self.id), items_removed_count=len(removed))

    # -------------------------------------------------------------------
    # Coupon management
    # -------------------------------------------------------------------
    @property
    def coupon_code(self) -> str | None:
        """The coupon code as entered, or None."""
        return self._coupon_code

    @coupon_code.setter
    def coupon_code(self, code: str | None) -> None:
        code = normalize_coupon_code(code)
        previous = self._coupon_code

        # Usability is asked of the pricing rules before the change commits
        with self._atomic(recalculate=False):
            self._coupon_code = code
            self._recalculate()
            usable = self.has_usable_coupon

        if code is not None:
            self.raise_(CartCouponApplied(cart_id=str(self.id), coupon_code=code, usable=usable))
            logger.info("Coupon code entered", cart_id=str(self.id), coupon_code=code, usable=usable)
        elif previous is not None:
            self.raise_(CartCouponCleared(cart_id=str(self.id), previous_code=previous))
            logger.info("Coupon code cleared", cart_id=str(self.id), previous_code=previous)

    # -------------------------------------------------------------------
    # Addresses and selections
    # -------------------------------------------------------------------
    @property
    def billing_address(self) -> CustomerAddress | None:
        """The cart's own billing address; edits to it are saved with the cart."""
        return self._billing_address

    @billing_address.setter
    def billing_address(self, address: CustomerAddress | None) -> None:
        with self._atomic():
            self._billing_address = address.duplicate() if address is not None else None

    @property
    def shipping_address(self) -> CustomerAddress | None:
        return self._shipping_address

    @shipping_address.setter
    def shipping_address(self, address: CustomerAddress | None) -> None:
        with self._atomic():
            self._shipping_address = address.duplicate() if address is not None else None

    @property
    def shipping_option(self) -> ShippingOption | None:
        return self._shipping_option

    @shipping_option.setter
    def shipping_option(self, option: ShippingOption | None) -> None:
        with self._atomic():
            self._shipping_option = option

    @property
    def payment_method(self) -> PaymentMethod | None:
        return self._payment_method

    @payment_method.setter
    def payment_method(self, method: PaymentMethod | None) -> None:
        with self._atomic():
            self._payment_method = method

    # -------------------------------------------------------------------
    # Customer
    # -------------------------------------------------------------------
    @property
    def user(self) -> User | None:
        return self._user

    @user.setter
    def user(self, user: User | None) -> None:
        self._user = user

    @property
    def customer(self) -> Customer | None:
        """The associated customer, or one built from the signed-in user."""
        if self._customer is not None:
            return self._customer
        if self._user is not None:
            return Customer.from_user(self._user)
        return None

    @customer.setter
    def customer(self, customer: Customer | None) -> None:
        self._customer = customer

    # -------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------
    def validate(self) -> ValidationReport:
        """Check the whole cart against current catalogue state."""
        with translate_errors(CatalogueUnavailableError):
            return self._validator.validate(self)

    def validate_content(self) -> ValidationReport:
        """Check only the lines: products sellable, unit counts within limits."""
        with translate_errors(CatalogueUnavailableError):
            return self._validator.validate_content(self.items)

    # -------------------------------------------------------------------
    # Recalculation
    # -------------------------------------------------------------------
    def recalculate(self) -> CartTotals:
        """Re-derive totals, e.g. after editing the cart's address in place."""
        with self._atomic():
            pass
        return self._totals

    def _snapshot(self, discounted: bool = False) -> CartSnapshot:
        snapshot = CartSnapshot(
            cart_id=str(self.id),
            currency=self.currency,
            lines=tuple(item.to_snapshot() for item in self.items),
            coupon_code=self._coupon_code,
            billing_address=self._billing_address.duplicate() if self._billing_address else None,
            shipping_address=self._shipping_address.duplicate() if self._shipping_address else None,
            shipping_option=self._shipping_option,
            payment_method=self._payment_method,
        )
        if discounted:
            return snapshot.with_discounts(self._totals.line_discounts)
        return snapshot

    def _recalculate(self) -> None:
        totals = calculate_totals(self._snapshot(), self._pricing, self._tax, self._shipping_rates)

        for item in self.items:
            item.discount = totals.line_discounts.get(str(item.id), 0.0)
        self._totals = totals

    def _memento(self) -> _Memento:
        items = list(self.items)
        return _Memento(
            items=items,
            item_state={item.id: {name: getattr(item, name) for name in _LINE_STATE} for item in items},
            coupon_code=self._coupon_code,
            billing_address=self._billing_address,
            shipping_address=self._shipping_address,
            shipping_option=self._shipping_option,
            payment_method=self._payment_method,
            totals=self._totals,
            updated_at=self.updated_at,
        )

    def _restore(self, memento: _Memento) -> None:
        if [item.id for item in self.items] != [item.id for item in memento.items]:
            self.items = []
            if memento.items:
                self.items = list(memento.items)
            # Lines put back are no longer pending removal
            changes = self._temp_cache.get("items")
            if changes is not None:
                for item in memento.items:
                    changes.removed.pop(item.id, None)

        for item in memento.items:
            for name, value in memento.item_state[item.id].items():
                setattr(item, name, value)

        self._coupon_code = memento.coupon_code
        self._billing_address = memento.billing_address
        self._shipping_address = memento.shipping_address
        self._shipping_option = memento.shipping_option
        self._payment_method = memento.payment_method
        self._totals = memento.totals
        self.updated_at = memento.updated_at

    @contextmanager
    def _atomic(self, recalculate: bool = True):
        """Apply a change and re-derive totals, or roll back both."""
        memento = self._memento()
        try:
            yield
            if recalculate:
                self._recalculate()
            self.updated_at = datetime.now(UTC)
        except Exception:
            self._restore(memento)
            logger.warning("Cart change rolled back", cart_id=str(self.id), exc_info=True)
            raise

    # -------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------
    def to_state(self) -> CartState:
        customer = self.customer
        return CartState(
            cart_id=str(self.id),
            user_id=self._user.id if self._user else None,
            customer_id=customer.id if customer else None,
            currency=self.currency,
            lines=self._snapshot(discounted=True).lines,
            coupon_code=self._coupon_code,
            billing_address=self._billing_address.duplicate() if self._billing_address else None,
            shipping_address=self._shipping_address.duplicate() if self._shipping_address else None,
            shipping_option_id=self._shipping_option.id if self._shipping_option else None,
            payment_method_id=self._payment_method.id if self._payment_method else None,
            totals=self._totals,
        )

    def save(self) -> SaveResult:
        """Persist the cart, then bring the shopper's contact up to date.

        Only the contact's first name and email are synchronised; the last
        name is left as the contact has it. Contact synchronisation is not
        attempted when the save fails.
        """
        if self._repository is None:
            raise ValidationError({"repository": ["A cart repository is required to save"]})

        self.recalculate()

        with translate_errors(PersistenceError):
            result = self._repository.save(self.to_state())
        if not result.success:
            logger.error("Cart save failed", cart_id=str(self.id), reason=result.failure_reason)
            raise PersistenceError(result.failure_reason or "Cart could not be saved")

        if self._billing_address is not None and result.billing_address_id is not None:
            self._billing_address.address_id = result.billing_address_id
        if self._shipping_address is not None and result.shipping_address_id is not None:
            self._shipping_address.address_id = result.shipping_address_id

        self._sync_contact()

        item_count = len(self.items)
        self.raise_(CartSaved(cart_id=str(self.id), total=self.total_price, item_count=item_count))
        logger.info("Cart saved", cart_id=str(self.id), total=self.total_price, item_count=item_count)
        return result

    def _sync_contact(self) -> None:
        customer = self.customer
        if self._contacts is None or customer is None:
            return

        with translate_errors(ContactSyncError):
            contact = self._contacts.current_contact(self._user)
            if contact is None:
                return
            self._contacts.update_contact(contact, first_name=customer.first_name, email=customer.email)

        logger.info("Contact updated from customer", cart_id=str(self.id), contact_id=contact.id)

    # -------------------------------------------------------------------
    # Activities
    # -------------------------------------------------------------------
    def _log_activity(self, activity_type: ActivityType, item: LineItem, units: int) -> None:
        if self._activity_log is None:
            return
        self._activity_log.log(
            Activity(
                activity_type=activity_type,
                item_id=str(item.product_id),
                title=item.name,
                value=str(units),
                cart_id=str(self.id),
                user_id=self._user.id if self._user else None,
            )
        )
