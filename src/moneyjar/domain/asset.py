"""Asset portfolio domain service."""

import math
from dataclasses import dataclass, replace
from datetime import datetime, UTC
from typing import Optional

from moneyjar.domain.entities import UNIT_BASED_ASSET_TYPES, Asset, AssetType
from moneyjar.domain.errors import NotFoundError, ValidationError, entity_not_found
from moneyjar.domain.state import StateStore, new_id
from moneyjar.utils.logger import get_logger

logger = get_logger(__name__)

# Net-worth milestones in VND; past the last one, the value rounded up to 10 billion plus 10 billion
NET_WORTH_MILESTONES = (
    100_000_000,
    500_000_000,
    1_000_000_000,
    2_000_000_000,
    5_000_000_000,
    10_000_000_000,
)


@dataclass(frozen=True)
class AssetGroup:
    type: AssetType
    assets: list[Asset]
    total: float
    initial: float

    @property
    def profit(self) -> float:
        return self.total - self.initial

    @property
    def roi(self) -> float:
        return self.profit / self.initial * 100 if self.initial > 0 else 0.0


@dataclass(frozen=True)
class PortfolioSummary:
    total_assets: float
    total_invested: float
    total_liabilities: float
    net_worth: float
    total_profit: float
    roi: float
    groups: list[AssetGroup]


def next_milestone(net_worth: float) -> float:
    """Next round net-worth target above the current value."""
    for milestone in NET_WORTH_MILESTONES:
        if net_worth < milestone:
            return milestone
    return math.ceil(net_worth / 10_000_000_000) * 10_000_000_000 + 10_000_000_000


def portfolio_summary(assets: list[Asset]) -> PortfolioSummary:
    """Totals over all assets; DEBT entries count as liabilities."""
    holdings = [a for a in assets if a.type != AssetType.DEBT]
    total_assets = sum(a.value for a in holdings)
    total_invested = sum(a.initial_value for a in holdings)
    total_liabilities = sum(a.value for a in assets if a.type == AssetType.DEBT)
    total_profit = total_assets - total_invested

    grouped: dict[AssetType, list[Asset]] = {}
    for asset in assets:
        grouped.setdefault(asset.type, []).append(asset)
    groups = [
        AssetGroup(
            type=asset_type,
            assets=members,
            total=sum(a.value for a in members),
            initial=sum(a.initial_value for a in members),
        )
        for asset_type, members in grouped.items()
    ]

    return PortfolioSummary(
        total_assets=total_assets,
        total_invested=total_invested,
        total_liabilities=total_liabilities,
        net_worth=total_assets - total_liabilities,
        total_profit=total_profit,
        roi=total_profit / total_invested * 100 if total_invested > 0 else 0.0,
        groups=groups,
    )


class AssetService:
    """Service for managing assets and liabilities."""

    def __init__(self, store: StateStore):
        """Initialize asset service.

        Args:
            store: StateStore instance
        """
        self.store = store

    def add_asset(
        self,
        name: str,
        type: AssetType,
        value: float = 0.0,
        initial_value: Optional[float] = None,
        quantity: Optional[float] = None,
        buy_price: Optional[float] = None,
        current_price: Optional[float] = None,
        note: Optional[str] = None,
    ) -> Asset:
        """Add an asset.

        Unit-based kinds (gold, stocks, crypto, funds) derive their value from
        quantity and prices; other kinds take ``value`` directly.

        Raises:
            ValidationError: If a unit-based asset has no quantity, or any amount is negative
        """
        if type in UNIT_BASED_ASSET_TYPES:
            if quantity is None:
                raise ValidationError(f"{type.value} assets require a quantity")
            buy_price = buy_price or 0.0
            current_price = current_price if current_price is not None else buy_price
            value = quantity * current_price
            initial_value = quantity * buy_price
        elif initial_value is None:
            initial_value = value

        if value < 0 or initial_value < 0:
            raise ValidationError("Asset values must not be negative")

        asset = Asset(
            id=new_id(),
            name=name,
            type=type,
            value=value,
            initial_value=initial_value,
            last_updated=datetime.now(UTC),
            note=note,
            quantity=quantity,
            buy_price=buy_price,
            current_price=current_price,
        )
        self.store.commit(assets=self.store.state.assets + (asset,))
        logger.info("Added asset %s (%s)", asset.id, name)
        return asset

    def get_asset(self, asset_id: str) -> Optional[Asset]:
        for asset in self.store.state.assets:
            if asset.id == asset_id:
                return asset
        return None

    def list_assets(self, type: Optional[AssetType] = None) -> list[Asset]:
        return [a for a in self.store.state.assets if type is None or a.type == type]

    def update_asset(self, asset_id: str, **changes) -> Asset:
        """Replace fields of an asset, re-deriving value for unit-based kinds."""
        asset = self.get_asset(asset_id)
        if asset is None:
            raise NotFoundError(entity_not_found("Asset", asset_id))

        updated = replace(asset, **changes, last_updated=datetime.now(UTC))
        if updated.type in UNIT_BASED_ASSET_TYPES and updated.quantity is not None:
            updated = replace(
                updated,
                value=updated.quantity * (updated.current_price or 0.0),
                initial_value=updated.quantity * (updated.buy_price or 0.0),
            )
        self.store.commit(
            assets=tuple(updated if a.id == asset_id else a for a in self.store.state.assets)
        )
        logger.info("Updated asset %s", asset_id)
        return updated

    def update_price(self, asset_id: str, price: float) -> Asset:
        """Set the market value: unit price for unit-based kinds, total value otherwise."""
        if price < 0:
            raise ValidationError("Price must not be negative")
        asset = self.get_asset(asset_id)
        if asset is None:
            raise NotFoundError(entity_not_found("Asset", asset_id))
        if asset.type in UNIT_BASED_ASSET_TYPES:
            return self.update_asset(asset_id, current_price=price)
        return self.update_asset(asset_id, value=price)

    def delete_asset(self, asset_id: str) -> None:
        if self.get_asset(asset_id) is None:
            raise NotFoundError(entity_not_found("Asset", asset_id))
        self.store.commit(assets=tuple(a for a in self.store.state.assets if a.id != asset_id))
        logger.info("Deleted asset %s", asset_id)

    def summary(self) -> PortfolioSummary:
        return portfolio_summary(list(self.store.state.assets))
