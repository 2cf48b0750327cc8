"""CLI helpers for wallet resolution."""

from __future__ import annotations

import click

from moneyjar.cli.error_handling import handle_domain_error
from moneyjar.domain.wallet import WalletService
from moneyjar.utils.wallet_resolver import resolve_wallet


def resolve_wallet_or_exit(
    ctx: click.Context, wallet_service: WalletService, wallet: str | None
) -> str | None:
    """Resolve wallet name or ID, or exit with a CLI error.

    None passes through so services can apply their default wallet.
    """
    if wallet is None:
        return None
    try:
        return resolve_wallet(wallet_service, wallet)
    except ValueError as exc:
        handle_domain_error(ctx, exc)
