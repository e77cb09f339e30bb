"""Application commands (use cases) for pricing and module placement."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Mapping
from typing import Any

from parametrics.contracts import SettingsStoreProtocol
from parametrics.domain import (
    DEFAULT_SETTINGS,
    CurrencyBasis,
    PlacedModule,
    PlacementDraft,
    PriceAdjustmentSettings,
    PriceQuote,
    PricingError,
    ProductFamily,
    aggregate_totals,
    apply_formula,
    build_placed_module,
    compute_adjusted_price,
    resolve_dimensions,
    resolve_tier_price,
    validate_placement,
)
from parametrics.domain.money import round_money, to_number

from .dtos import PlacementOutput, ProductInput, QuoteOutput

logger = logging.getLogger(__name__)


class QuotePriceCommand:
    """Command to price one product at caller-requested dimensions.

    Runs the full pricing chain: reference price selection (tier price for
    kitchen modules), dimension resolution, price adjustments and the
    product's pricing formula.
    """

    def __init__(self, settings_store: SettingsStoreProtocol | None = None) -> None:
        self.settings_store = settings_store

    def current_settings(self) -> PriceAdjustmentSettings:
        if self.settings_store is None:
            return DEFAULT_SETTINGS
        return self.settings_store.load()

    def execute(
        self,
        product: ProductInput,
        requested: Mapping[str, Any] | None = None,
        currency: str = "USD",
        tier: Any = None,
        currency_basis: CurrencyBasis = CurrencyBasis.PAYMENT,
        settings: PriceAdjustmentSettings | None = None,
    ) -> QuoteOutput:
        """Execute the quote command.

        Args:
            product: Catalog facts about the product.
            requested: Optional requested dimensions (``width_mm`` etc.).
            currency: Paying currency.
            tier: Price tier for kitchen modules; ignored for other families.
            currency_basis: Which currency keys the currency surcharge.
            settings: Settings snapshot; read from the store when omitted.

        Returns:
            QuoteOutput with the quote, or errors when the product cannot be
            priced.
        """
        errors = product.validate()
        if errors:
            return QuoteOutput(errors=errors)

        if product.family == ProductFamily.KITCHEN_MODULE:
            reference = resolve_tier_price(product.tier_prices(), tier)
        else:
            base = to_number(product.base_price_usd, 0.0)
            reference = product.base_price_usd if base > 0 else product.list_price_usd
        if to_number(reference, 0.0) <= 0:
            return QuoteOutput(errors=[f"Product {product.product_id!r} has no positive price"])

        snapshot = settings if settings is not None else self.current_settings()
        try:
            schema = product.to_schema(round_money(reference))
            dims = resolve_dimensions(schema, requested)
            adjusted = compute_adjusted_price(
                reference,
                currency,
                product.category_id,
                snapshot,
                currency_basis=currency_basis,
                settlement_currency=product.supplier_currency,
            )
        except (PricingError, ValueError) as e:
            return QuoteOutput(errors=[str(e)])

        notes: list[str] = []
        outcome = apply_formula(
            product.pricing_formula,
            dims,
            adjusted,
            product.category_id,
            schema=schema,
        )
        if outcome.reason:
            notes.append(f"Formula ignored: {outcome.reason}")
        unit_price = outcome.price

        quote = PriceQuote(
            dimensions=dims,
            adjusted_reference_price=adjusted,
            unit_price=unit_price,
            formula_applied=outcome.applied,
            notes=tuple(notes),
        )
        logger.info(
            f"Quoted {product.product_id} at {dims.width_mm:g}x{dims.height_mm:g}x"
            f"{dims.depth_mm:g} mm in {currency}: {unit_price}"
        )
        return QuoteOutput(quote=quote)


class PlaceModuleCommand:
    """Command to place or resize a kitchen module in a design.

    Validates the draft, prices the product at the normalized width, builds
    the module to persist and recomputes the design totals with the module
    in place. Persisting the module is left to the caller.
    """

    def __init__(self, quote_command: QuotePriceCommand | None = None) -> None:
        self.quote_command = quote_command or QuotePriceCommand()

    def execute(
        self,
        draft: PlacementDraft,
        product: ProductInput,
        existing: Iterable[PlacedModule],
        currency: str = "USD",
        tier: Any = None,
        settings: PriceAdjustmentSettings | None = None,
    ) -> PlacementOutput:
        """Execute the placement command.

        Args:
            draft: Proposed placement. A draft with ``module_id`` updates
                that module.
            product: Catalog facts about the product being placed.
            existing: Modules already in the design.
            currency: Paying currency, used for pricing and the discount.
            tier: Kitchen price tier.
            settings: Settings snapshot; read from the store when omitted.

        Returns:
            PlacementOutput with the module to persist and updated totals.
        """
        modules = list(existing)
        snapshot = settings if settings is not None else self.quote_command.current_settings()

        placement = validate_placement(draft, product.to_constraints(), modules)
        if not placement.is_valid:
            return PlacementOutput(placement=placement, errors=list(placement.errors))

        geometry = placement.normalized
        quote_output = self.quote_command.execute(
            product,
            requested={"width_mm": geometry.width_mm},
            currency=currency,
            tier=tier,
            settings=snapshot,
        )
        if not quote_output.is_valid:
            return PlacementOutput(placement=placement, errors=quote_output.errors)
        assert quote_output.quote is not None

        module_id = draft.module_id or uuid.uuid4().hex
        module = build_placed_module(
            placement,
            product.to_constraints(),
            module_id,
            quote_output.quote.unit_price,
        )

        layout = [m for m in modules if m.id != module_id]
        layout.append(module)
        totals = aggregate_totals(layout, currency=currency, settings=snapshot)

        logger.info(
            f"Placed {product.product_id} as {module_id} at x={geometry.position_x} "
            f"y={geometry.position_y} width={geometry.width_mm}; total {totals.total}"
        )
        return PlacementOutput(placement=placement, module=module, totals=totals)
