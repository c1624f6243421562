"""Builders from service results to response schemas"""

from procurement.schemas.cost import CostResponse, CostProductLinkResponse
from procurement.schemas.milestone import (
    MilestoneTypeResponse, OrderMilestoneResponse, ProductMilestoneResponse
)
from procurement.schemas.order import (
    OrderResponse, OrderListItem, OrderSummaryResponse, OrderFullResponse
)
from procurement.schemas.payment import (
    PaymentResponse, PaymentProductLinkResponse, PaymentCostLinkResponse
)
from procurement.schemas.product import ProductResponse, ProductWithCostsResponse
from procurement.services.orders import OrderFull
from procurement.services.settlement import (
    OrderSummary, ProductCosts, CostAmounts, PaymentAmounts
)


def build_summary_response(summary: OrderSummary) -> OrderSummaryResponse:
    return OrderSummaryResponse(
        product_count=summary.product_count,
        total_products_ils=float(summary.total_products_ils),
        total_costs_ils=float(summary.total_costs_ils),
        total_order_ils=float(summary.total_order_ils),
        total_paid_ils=float(summary.total_paid_ils),
        balance_ils=float(summary.balance_ils),
        total_cbm=float(summary.total_cbm),
        total_kg=float(summary.total_kg),
    )


def build_order_list_item(order, summary: OrderSummary) -> OrderListItem:
    totals = build_summary_response(summary).model_dump(exclude={"total_cbm", "total_kg"})
    return OrderListItem(**OrderResponse.model_validate(order).model_dump(), **totals)


def build_product_response(item: ProductCosts) -> ProductWithCostsResponse:
    return ProductWithCostsResponse(
        **ProductResponse.model_validate(item.product).model_dump(),
        price_ils=float(item.price_ils),
        additional_costs_ils=float(item.additional_costs_ils),
        final_cost_ils=float(item.final_cost_ils),
        final_cost_per_unit_ils=float(item.final_cost_per_unit_ils),
    )


def build_cost_response(item: CostAmounts) -> CostResponse:
    cost = item.cost
    return CostResponse(
        id=cost.id,
        cost_id=cost.cost_id,
        order_id=cost.order_id,
        description=cost.description,
        amount=float(cost.amount),
        currency=cost.currency,
        allocation_method=cost.allocation_method,
        notes=cost.notes,
        amount_ils=float(item.amount_ils),
        linked_product_count=item.linked_product_count,
    )


def build_payment_response(item: PaymentAmounts) -> PaymentResponse:
    payment = item.payment
    return PaymentResponse(
        id=payment.id,
        payment_id=payment.payment_id,
        order_id=payment.order_id,
        date=payment.date,
        amount=float(payment.amount),
        currency=payment.currency,
        payee=payment.payee,
        description=payment.description,
        reference=payment.reference,
        status=payment.status,
        status_display=payment.status_display,
        amount_ils=float(item.amount_ils),
    )


def build_order_full_response(full: OrderFull) -> OrderFullResponse:
    return OrderFullResponse(
        order=OrderResponse.model_validate(full.order),
        products=[build_product_response(p) for p in full.products],
        costs=[build_cost_response(c) for c in full.costs],
        payments=[build_payment_response(p) for p in full.payments],
        links=[CostProductLinkResponse.model_validate(l) for l in full.links],
        payment_product_links=[PaymentProductLinkResponse.model_validate(l) for l in full.payment_product_links],
        payment_cost_links=[PaymentCostLinkResponse.model_validate(l) for l in full.payment_cost_links],
        order_milestones=[OrderMilestoneResponse.model_validate(m) for m in full.order_milestones],
        product_milestones=[ProductMilestoneResponse.model_validate(m) for m in full.product_milestones],
        milestone_types=[MilestoneTypeResponse.model_validate(t) for t in full.milestone_types],
        summary=build_summary_response(full.summary),
    )
