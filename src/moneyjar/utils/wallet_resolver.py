"""Utility for resolving wallet names to IDs."""

from moneyjar.domain.wallet import WalletService


def resolve_wallet(wallet_service: WalletService, wallet: str) -> str:
    """Resolve wallet ID or name to wallet ID.

    IDs take precedence; names match case-insensitively.

    Args:
        wallet_service: WalletService instance
        wallet: Wallet ID or name

    Returns:
        Wallet ID

    Raises:
        ValueError: If no wallet matches
    """
    if wallet_service.get_wallet(wallet) is not None:
        return wallet

    wanted = wallet.strip().lower()
    for candidate in wallet_service.list_wallets():
        if candidate.name.lower() == wanted:
            return candidate.id

    raise ValueError(f"Wallet '{wallet}' not found")
