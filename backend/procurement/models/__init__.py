# Models package - importing it registers every table on Base.metadata

from procurement.models.order import PurchaseOrder
from procurement.models.product import Product
from procurement.models.additional_cost import AdditionalCost
from procurement.models.payment import Payment, PAYMENT_PENDING, PAYMENT_APPROVED
from procurement.models.links import CostProductLink, PaymentProductLink, PaymentCostLink
from procurement.models.milestone import MilestoneType, OrderMilestone, ProductMilestone
from procurement.models.supplier import Supplier

__all__ = [
    "PurchaseOrder",
    "Product",
    "AdditionalCost",
    "Payment",
    "PAYMENT_PENDING",
    "PAYMENT_APPROVED",
    "CostProductLink",
    "PaymentProductLink",
    "PaymentCostLink",
    "MilestoneType",
    "OrderMilestone",
    "ProductMilestone",
    "Supplier",
]
