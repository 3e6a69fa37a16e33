"""Unified error codes and custom exceptions.

Every settlement failure carries a stable numeric code and a verbatim reason
string. Off-ledger clients match on the reason text, so never reword it.

Error code ranges:
  1xxx: Auth/Caller
  2xxx: Batch / Exchange
  3xxx: Order verification
  4xxx: Payment
  5xxx: Asset custody
  6xxx: Admin / configuration
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth/Caller ---

class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Invalid or expired token", 401)


class AdminRequiredError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Admin role required", 403)


# --- 2xxx: Batch / Exchange ---

class BatchShapeError(AppError):
    def __init__(self, reason: str) -> None:
        super().__init__(2001, f"MarketplaceExchange: {reason}", 422)


class ValueMismatchError(AppError):
    def __init__(self) -> None:
        super().__init__(2002, "MarketplaceExchange: value is not matched", 422)


class CallerMismatchError(AppError):
    def __init__(self, role: str = "seller") -> None:
        super().__init__(
            2003, f"MarketplaceExchange: message sender must be equal {role}.", 403
        )


# --- 3xxx: Order verification ---

class ExpiredOrderError(AppError):
    def __init__(self, what: str = "order") -> None:
        super().__init__(3001, f"MarketplaceOrderVerifier: already expired {what}", 422)


class ReserveBuyerMismatchError(AppError):
    def __init__(self) -> None:
        super().__init__(3002, "MarketplaceOrderVerifier: reserve buyer not matched", 403)


class InvalidAssetContractError(AppError):
    def __init__(self) -> None:
        super().__init__(
            3003, "MarketplaceOrderVerifier: exchangeContract address must be not zero", 422
        )


class SignatureMismatchError(AppError):
    def __init__(self) -> None:
        super().__init__(
            3004, "MarketplaceOrderVerifier: signer not matched or order not matched", 401
        )


class AlreadySoldError(AppError):
    def __init__(self) -> None:
        super().__init__(3005, "MarketplaceOrderVerifier: already sold order", 409)


class AlreadyCancelledError(AppError):
    def __init__(self) -> None:
        super().__init__(3006, "MarketplaceOrderVerifier: already cancel order", 409)


class OfferSellerMismatchError(AppError):
    def __init__(self) -> None:
        super().__init__(
            3007, "MarketplaceOrderVerifier: seller and message sender not matched", 403
        )


class UnknownSignSchemeError(AppError):
    def __init__(self, scheme: int) -> None:
        super().__init__(
            3008, f"MarketplaceOrderVerifier: unknown sign scheme {scheme}", 422
        )


# --- 4xxx: Payment ---

class UnsupportedPaymentTokenError(AppError):
    def __init__(self) -> None:
        super().__init__(
            4001, "MarketplacePaymentManager: impossible transfer token type", 422
        )


class OfferNativePaymentError(AppError):
    def __init__(self) -> None:
        super().__init__(
            4002,
            "MarketplacePaymentManager: payment token address must be not zero when offer",
            422,
        )


class InsufficientAllowanceError(AppError):
    def __init__(self, required: int, allowed: int) -> None:
        super().__init__(
            4003,
            f"MarketplacePaymentManager: insufficient allowance: required {required}, "
            f"allowed {allowed}",
            422,
        )


class InsufficientFundsError(AppError):
    def __init__(self, account: str, required: int) -> None:
        super().__init__(
            4004,
            f"MarketplacePaymentManager: insufficient balance: {account} cannot pay {required}",
            422,
        )


# --- 5xxx: Asset custody ---

class AssetNotApprovedError(AppError):
    def __init__(self, owner: str) -> None:
        super().__init__(
            5001,
            f"MarketplaceExchange: exchange is not approved for assets of {owner}",
            422,
        )


class InsufficientAssetBalanceError(AppError):
    def __init__(self, owner: str, asset_id: int) -> None:
        super().__init__(
            5002,
            f"MarketplaceExchange: insufficient asset balance: {owner} token {asset_id}",
            422,
        )


# --- 6xxx: Admin / configuration ---

class InvalidBasisPointsError(AppError):
    def __init__(self, value: int) -> None:
        super().__init__(6001, f"Basis points must be between 0 and 10000, got {value}", 422)


class InvalidAddressError(AppError):
    def __init__(self, value: str) -> None:
        super().__init__(6002, f"Invalid address: {value}", 422)


class MarketplaceNotConfiguredError(AppError):
    def __init__(self) -> None:
        super().__init__(6003, "Marketplace settings row is missing", 500)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
