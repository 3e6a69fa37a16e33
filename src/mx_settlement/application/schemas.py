from pydantic import BaseModel, Field

from src.mx_order.application.schemas import OfferOrderIn, SaleOrderIn, SignatureIn
from src.mx_order.domain.models import UINT256_MAX
from src.mx_settlement.domain.models import SettlementReceipt


class SubmitSalesRequest(BaseModel):
    orders: list[SaleOrderIn]
    signatures: list[SignatureIn]
    buy_quantities: list[int] | None = None
    value: int = Field(0, ge=0, le=UINT256_MAX)  # native currency attached by the buyer


class SubmitOfferRequest(BaseModel):
    order: OfferOrderIn
    signature: SignatureIn


class ReceiptResponse(BaseModel):
    digest: str
    kind: str
    buyer: str
    seller: str
    quantity: int
    total_price: int
    fee: int
    royalty: int
    seller_proceeds: int

    @classmethod
    def from_receipt(cls, receipt: SettlementReceipt) -> "ReceiptResponse":
        return cls(
            digest=receipt.digest,
            kind=receipt.kind.value,
            buyer=receipt.buyer,
            seller=receipt.seller,
            quantity=receipt.quantity,
            total_price=receipt.total_price,
            fee=receipt.fee,
            royalty=receipt.royalty,
            seller_proceeds=receipt.seller_proceeds,
        )


class SubmitSalesResponse(BaseModel):
    receipts: list[ReceiptResponse]
    value: int
